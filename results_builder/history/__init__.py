"""
History resolver implementations.

Available implementations:
- GitHistoryResolver: Date added from the earliest git commit touching a file
- FixedHistoryResolver: Same timestamp for every file (history disabled)
"""

from .git_history import FixedHistoryResolver, GitHistoryResolver

__all__ = ["FixedHistoryResolver", "GitHistoryResolver"]
