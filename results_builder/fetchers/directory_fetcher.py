"""
Directory result fetcher implementation.

Reads result files from a flat directory.
"""

from collections.abc import Iterable
from pathlib import Path

from typing_extensions import override

from ..interfaces import ResultFetcher
from ..logging_config import get_logger
from ..models import ResultFile


class DirectoryResultFetcher(ResultFetcher):
    """
    Result fetcher that reads from a single directory.

    Treats result files as opaque - only stores file paths. Files are
    listed in file-name order so output is stable across runs.
    """

    def __init__(self, results_dir: Path, pattern: str = "*"):
        """
        Initialize directory result fetcher.

        Args:
            results_dir: Directory containing result files
            pattern: File pattern to match (default: "*")
        """
        self.results_dir: Path = Path(results_dir)
        self.pattern: str = pattern

        self.logger = get_logger("directory_fetcher")

        if not self.results_dir.exists():
            raise FileNotFoundError(
                f"Results directory does not exist: {self.results_dir}"
            )

        if not self.results_dir.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {self.results_dir}")

        self._cache = dict[str, ResultFile]()
        self._cache_loaded: bool = False

    def _load_results(self) -> None:
        """Load all result files from directory into cache."""
        if self._cache_loaded:
            return

        result_files = sorted(self.results_dir.glob(self.pattern))

        if not result_files:
            self.logger.warning(
                f"No files matching pattern '{self.pattern}' found in {self.results_dir}"
            )

        for result_file in result_files:
            # Subdirectories and broken links are not result files
            if not result_file.is_file():
                continue

            result = ResultFile(name=result_file.name, file_path=result_file.resolve())
            self._cache[result.name] = result

        self._cache_loaded = True
        self.logger.info(f"Found {len(self._cache)} result files in {self.results_dir}")

    @override
    def list_results(self) -> Iterable[ResultFile]:
        """Return all available result files."""
        self._load_results()
        return self._cache.values()
