"""
Git history resolver.

Finds the date a result file was first committed. Result files were moved
from `data/` to `results/` on 2020-07-08, so earlier dates are re-checked
against the legacy location.
"""

import subprocess
from datetime import date, datetime
from pathlib import Path, PurePosixPath

from typing_extensions import override

from ..exceptions import HistoryLookupFailure
from ..interfaces import HistoryResolver
from ..logging_config import get_logger

# Module-level logger
logger = get_logger("git_history")

RELOCATION_CUTOVER = date(2020, 7, 8)
GIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


class GitHistoryResolver(HistoryResolver):
    """
    History resolver backed by `git log`.

    The fallback time is captured once at construction so every file
    without history in a run gets the same timestamp.
    """

    def __init__(
        self,
        repo_root: Path,
        results_dir: str = "results",
        legacy_dir: str = "data",
        cutover: date = RELOCATION_CUTOVER,
        timeout: float = 30.0,
        now: datetime | None = None,
    ):
        """
        Initialize git history resolver.

        Args:
            repo_root: Working directory for git commands
            results_dir: Repository-relative directory of result files
            legacy_dir: Directory result files lived in before the cutover
            cutover: Dates before this trigger the legacy-path retry
            timeout: Timeout in seconds for each git invocation
            now: Fallback timestamp (default: current local time)
        """
        self.repo_root: Path = Path(repo_root)
        self.results_dir: str = results_dir
        self.legacy_dir: str = legacy_dir
        self.cutover: date = cutover
        self.timeout: float = timeout
        self.now: datetime = now if now is not None else datetime.now().astimezone()

    def _run_git_log(self, path: PurePosixPath) -> str:
        """
        Run `git log` listing commit dates for `path`, oldest first.

        Raises:
            HistoryLookupFailure: If git is missing, times out or fails
        """
        cmd = ["git", "log", "--format=%ai", "--reverse", "--", str(path)]
        logger.debug(f"Running git command: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_root,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except FileNotFoundError as e:
            raise HistoryLookupFailure(path, "git executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise HistoryLookupFailure(path, f"git log timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            raise HistoryLookupFailure(
                path, f"git log exited with code {e.returncode}: {(e.stderr or '').strip()}"
            ) from e

        return result.stdout

    def date_from_git(self, path: PurePosixPath) -> datetime:
        """
        Earliest commit date touching `path`.

        Raises:
            HistoryLookupFailure: If there is no parsable history for `path`
        """
        output = self._run_git_log(path)
        first_line = next((line.strip() for line in output.splitlines() if line.strip()), "")
        if not first_line:
            raise HistoryLookupFailure(path, "not found in git tree")
        try:
            return datetime.strptime(first_line, GIT_DATE_FORMAT)
        except ValueError as e:
            raise HistoryLookupFailure(path, f"unparsable date {first_line!r}") from e

    @override
    def resolve_added_date(self, file_name: str) -> datetime:
        """Date added for a result file, falling back to the run's "now"."""
        path = PurePosixPath(self.results_dir, file_name)
        try:
            added = self.date_from_git(path)
        except HistoryLookupFailure as e:
            logger.warning(f"{e}; using current time as date added")
            print(f"Warning: {path}: {e.reason}; using current time as date added")
            return self.now

        if added.date() < self.cutover:
            legacy_path = PurePosixPath(self.legacy_dir, file_name)
            try:
                added = self.date_from_git(legacy_path)
            except HistoryLookupFailure as e:
                logger.warning(f"{e}; keeping date from {path}")

        return added


class FixedHistoryResolver(HistoryResolver):
    """History resolver that reports the same timestamp for every file."""

    def __init__(self, now: datetime | None = None):
        self.now: datetime = now if now is not None else datetime.now().astimezone()

    @override
    def resolve_added_date(self, file_name: str) -> datetime:
        return self.now
