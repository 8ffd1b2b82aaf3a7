"""
Orchestrator for building the results site.

Coordinates the fetcher, interpreter, logo resolver, history resolver and
output writers. Reading and interpreting result files may run in a thread
pool; everything that touches shared state runs on the main thread.
"""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

from .exceptions import InterpreterError, MalformedFileNameError
from .interfaces import HistoryResolver, Interpreter, ResultFetcher
from .logging_config import get_logger
from .logos.resolver import LogoResolver
from .models import ResultFile, ResultFileIdentity, TournamentRecord
from .naming import parse_result_file_name
from .output import print_banner, write_canonical_names, write_result_pages, write_results_index
from .templates import Templates

InterpreterLoader = Callable[[str], Interpreter]


@dataclass
class RunConfig:
    """Configuration for a site build."""

    output_dir: Path = Path("public/results")
    max_workers: int = 1  # thread pool size for reading and interpreting files
    canonical_names: bool = True  # write events.csv and schools.csv
    skip_malformed: bool = False  # warn and skip badly named result files
    hide_raw: bool = False  # render totals only on result pages

    def __post_init__(self):
        """Validate configuration."""
        self.output_dir = Path(self.output_dir)
        if self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")


def read_and_interpret(result: ResultFile, loader: InterpreterLoader) -> Interpreter:
    """Pure worker function - receives data, returns result."""
    try:
        text = result.file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InterpreterError(f"{result.file_path} is not valid UTF-8: {e}") from e
    return loader(text)


class Orchestrator:
    """Main orchestrator for building result pages and index artifacts."""

    def __init__(
        self,
        fetcher: ResultFetcher,
        loader: InterpreterLoader,
        logo_resolver: LogoResolver,
        history: HistoryResolver,
        templates: Templates,
        config: RunConfig,
    ):
        """Initialize orchestrator with all components."""
        self.fetcher: ResultFetcher = fetcher
        self.loader: InterpreterLoader = loader
        self.logo_resolver: LogoResolver = logo_resolver
        self.history: HistoryResolver = history
        self.templates: Templates = templates
        self.config: RunConfig = config

        self.skipped = list[tuple[str, str]]()  # (file name, reason)

        self.logger: Logger = get_logger("orchestrator")

    def run(self) -> list[TournamentRecord]:
        """Ingest every result file, then write all output artifacts."""
        self.logger.info(f"Starting site build with config: {self.config}")

        records = self.ingest()

        self.config.output_dir.mkdir(parents=True, exist_ok=True)
        write_result_pages(records, self.config.output_dir, self.templates, self.config.hide_raw)
        if self.config.canonical_names:
            write_canonical_names(records, self.config.output_dir)
        write_results_index(records, self.config.output_dir, self.templates)

        self.logger.info(f"Site build complete: {len(records)} tournaments")
        return records

    def _identify(self, results: list[ResultFile]) -> list[tuple[ResultFile, ResultFileIdentity]]:
        """Parse every file name up front so bad names fail before any work."""
        identified = list[tuple[ResultFile, ResultFileIdentity]]()
        for result in results:
            try:
                identified.append((result, parse_result_file_name(result.name)))
            except MalformedFileNameError as e:
                if not self.config.skip_malformed:
                    self.logger.error(f"Cannot process {result.file_path}: {e}")
                    raise
                self.logger.warning(f"Skipping {result.file_path}: {e}")
                self.skipped.append((result.name, e.reason))
        return identified

    def ingest(self) -> list[TournamentRecord]:
        """Build one TournamentRecord per result file, in file-name order."""
        identified = self._identify(list(self.fetcher.list_results()))
        self.logger.info(f"Ingesting {len(identified)} result files with {self.config.max_workers} workers")

        records = list[TournamentRecord]()
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [
                (result, identity, executor.submit(read_and_interpret, result, self.loader))
                for result, identity in identified
            ]

            # Collect in submission order so records stay in file-name order
            for result, identity, future in futures:
                self.logger.info(f"Parsing info for {result.file_path}")
                print(f"Parsing info for {result.file_path}...")
                try:
                    records.append(self._build_record(result, identity, future.result()))
                except Exception as e:
                    self.logger.error(f"Cannot process {result.file_path}: {e}")
                    raise

        print_banner("Parsing complete.")
        return records

    def _build_record(
        self, result: ResultFile, identity: ResultFileIdentity, interpreter: Interpreter
    ) -> TournamentRecord:
        """Resolve logo and date added for one interpreted file (main thread only)."""
        logo = self.logo_resolver.resolve_identity(identity)
        date_added = self.history.resolve_added_date(result.name)
        self.logger.debug(
            f"{result.name}: logo={logo.path}, color={logo.theme_color.hex}, added={date_added}"
        )
        return TournamentRecord(
            source=result,
            identity=identity,
            interpreter=interpreter,
            logo=logo,
            date_added=date_added,
        )

