"""
Results Builder - Tournament Results Site Generator

Builds static result pages for tournaments, choosing each tournament's logo
from a versioned catalog and deriving an accessible theme color from it.
"""

from .models import LogoAsset, ResolvedLogo, ResultFile, ResultFileIdentity, ThemeColor, TournamentRecord
from .interfaces import HistoryResolver, Interpreter, LogoSource, ResultFetcher
from .orchestrator import Orchestrator, RunConfig

__version__ = "0.1.0"
__all__ = [
    "LogoAsset",
    "ResolvedLogo",
    "ResultFile",
    "ResultFileIdentity",
    "ThemeColor",
    "TournamentRecord",
    "HistoryResolver",
    "Interpreter",
    "LogoSource",
    "ResultFetcher",
    "Orchestrator",
    "RunConfig",
]
