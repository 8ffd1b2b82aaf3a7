"""
Result interpreter implementations.

Available implementations:
- SciolyffInterpreter: SciolyFF YAML result files
"""

from .sciolyff import SciolyffInterpreter

__all__ = ["SciolyffInterpreter"]
