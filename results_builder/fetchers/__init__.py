"""
Result fetcher implementations.

Provides implementations of the ResultFetcher interface for locating result
files.

Available implementations:
- DirectoryResultFetcher: Lists result files in a flat directory
"""

from .directory_fetcher import DirectoryResultFetcher

__all__ = ["DirectoryResultFetcher"]
