"""
CLI entry point for the results builder.

Parses arguments, validates config, and wires components.
"""

import argparse
import sys
from argparse import Namespace
from pathlib import Path
from typing import TypedDict

from prettytable import PrettyTable

from .exceptions import ResultsBuilderError
from .fetchers.directory_fetcher import DirectoryResultFetcher
from .history.git_history import FixedHistoryResolver, GitHistoryResolver
from .interfaces import HistoryResolver
from .interpreters.sciolyff import SciolyffInterpreter
from .logging_config import get_logger, setup_logging
from .logos.catalog import build_catalog
from .logos.resolver import LogoResolver, default_logo_path
from .models import TournamentRecord
from .orchestrator import Orchestrator, RunConfig
from .templates import Templates


class CLIArgs(TypedDict):
    """Typed representation of parsed CLI arguments."""
    results_dir: str
    results_pattern: str
    logos_dir: str
    output_dir: str
    repo_root: str
    templates_dir: str | None
    workers: int
    git_timeout: float
    no_history: bool
    canonical_names: bool
    skip_malformed: bool
    hide_raw: bool
    debug: bool
    log_level: str


def parse_args(argv: list[str] | None = None) -> Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Build tournament result pages with logo-derived theme colors"
    )

    _ = parser.add_argument(
        "--results-dir",
        default="results",
        help="Directory of tournament result files (default: results)"
    )
    _ = parser.add_argument(
        "--results-pattern",
        default="*",
        help="Pattern for finding result files (default: *)"
    )
    _ = parser.add_argument(
        "--logos-dir",
        default="public/results/logos",
        help="Directory of logo images, including default.png (default: public/results/logos)"
    )
    _ = parser.add_argument(
        "--output-dir",
        default="public/results",
        help="Directory for generated pages and CSVs (default: public/results)"
    )
    _ = parser.add_argument(
        "--repo-root",
        default=".",
        help="Git working tree used to look up when result files were added (default: .)"
    )
    _ = parser.add_argument(
        "--templates-dir",
        default=None,
        help="Directory with result.html.j2 and results_index.html.j2 (default: bundled templates)"
    )
    _ = parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker threads for reading result files (default: 1)"
    )
    _ = parser.add_argument(
        "--git-timeout",
        type=float,
        default=30.0,
        help="Timeout for each git log call in seconds (default: 30)"
    )
    _ = parser.add_argument(
        "--no-history",
        action="store_true",
        help="Skip git lookups and use the current time as every date added"
    )
    _ = parser.add_argument(
        "--no-canonical-names",
        dest="canonical_names",
        action="store_false",
        help="Do not write events.csv and schools.csv"
    )
    _ = parser.add_argument(
        "--skip-malformed",
        action="store_true",
        help="Warn about and skip badly named result or logo files instead of aborting"
    )
    _ = parser.add_argument(
        "--hide-raw",
        action="store_true",
        help="Show only totals on result pages"
    )
    _ = parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set logging level (default: INFO)"
    )

    return parser.parse_args(argv)


def args_to_typed(ns: Namespace) -> CLIArgs:
    """Convert argparse Namespace to typed CLIArgs."""
    return CLIArgs(
        results_dir=ns.results_dir,
        results_pattern=ns.results_pattern,
        logos_dir=ns.logos_dir,
        output_dir=ns.output_dir,
        repo_root=ns.repo_root,
        templates_dir=ns.templates_dir,
        workers=ns.workers,
        git_timeout=ns.git_timeout,
        no_history=ns.no_history,
        canonical_names=ns.canonical_names,
        skip_malformed=ns.skip_malformed,
        hide_raw=ns.hide_raw,
        debug=ns.debug,
        log_level=ns.log_level,
    )


def validate_config(args: CLIArgs) -> None:
    """Validate configuration parameters."""
    logger = get_logger("validate_config")

    if args["workers"] <= 0:
        logger.error(f"workers must be positive, got {args['workers']}")
        print(f"Error: workers must be positive, got {args['workers']}")
        sys.exit(1)

    for key in ("results_dir", "logos_dir"):
        directory = Path(args[key])
        if not directory.is_dir():
            logger.error(f"{key} does not exist or is not a directory: {directory}")
            print(f"Error: {key.replace('_', ' ')} does not exist: {directory}")
            sys.exit(1)
        logger.info(f"{key}: {directory}")

    default_logo = default_logo_path(Path(args["logos_dir"]))
    if not default_logo.is_file():
        logger.error(f"Default logo is missing: {default_logo}")
        print(f"Error: default logo is missing: {default_logo}")
        sys.exit(1)

    output_dir = Path(args["output_dir"])
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Output directory: {output_dir}")


def wire_components(args: CLIArgs) -> Orchestrator:
    """Wire dependency injection components."""
    logger = get_logger("wire_components")

    logger.info("Creating result fetcher")
    fetcher = DirectoryResultFetcher(Path(args["results_dir"]), pattern=args["results_pattern"])

    logger.info("Building logo catalog")
    logos_dir = Path(args["logos_dir"])
    catalog = build_catalog(logos_dir, strict=not args["skip_malformed"])
    resolver = LogoResolver(catalog, default_logo=default_logo_path(logos_dir))

    history: HistoryResolver
    if args["no_history"]:
        logger.info("History lookups disabled")
        history = FixedHistoryResolver()
    else:
        logger.info(f"Creating git history resolver for {args['repo_root']}")
        history = GitHistoryResolver(Path(args["repo_root"]), timeout=args["git_timeout"])

    logger.info("Loading templates")
    templates_dir = args["templates_dir"]
    templates = Templates(Path(templates_dir) if templates_dir else None)

    config = RunConfig(
        output_dir=Path(args["output_dir"]),
        max_workers=args["workers"],
        canonical_names=args["canonical_names"],
        skip_malformed=args["skip_malformed"],
        hide_raw=args["hide_raw"],
    )
    logger.info(f"Configuration: {config}")

    return Orchestrator(
        fetcher=fetcher,
        loader=SciolyffInterpreter.from_yaml,
        logo_resolver=resolver,
        history=history,
        templates=templates,
        config=config,
    )


def summary_table(records: list[TournamentRecord]) -> PrettyTable:
    """Tabulate each tournament's page, logo, theme color and date added."""
    table = PrettyTable()
    table.field_names = ["Page", "Logo", "Color", "Added"]
    table.align["Page"] = "l"
    table.align["Logo"] = "l"

    for record in records:
        table.add_row([
            record.page_name,
            record.logo.path.name + (" (default)" if record.logo.is_default else ""),
            record.logo.theme_color.hex,
            record.date_added.strftime("%Y-%m-%d") if record.date_added else "",
        ])
    return table


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = args_to_typed(parse_args(argv))

    setup_logging(level=args["log_level"], debug=args["debug"])
    logger = get_logger("main")

    try:
        logger.info("Starting results builder")
        validate_config(args)

        print("Results Builder")
        print("=" * 60)
        print(f"Results directory: {args['results_dir']}")
        print(f"Logos directory: {args['logos_dir']}")
        print(f"Output directory: {args['output_dir']}")
        print(f"Workers: {args['workers']}")
        print(f"History: {'disabled' if args['no_history'] else args['repo_root']}")
        print("=" * 60)

        orchestrator = wire_components(args)
        records = orchestrator.run()

        print("\nTournaments:")
        print(summary_table(records))
        if orchestrator.skipped:
            print(f"\nSkipped {len(orchestrator.skipped)} malformed result files:")
            for name, reason in orchestrator.skipped:
                print(f"  {name}: {reason}")

        logger.info("Results builder completed successfully")
        print("\nDone!")

    except (ResultsBuilderError, OSError) as e:
        logger.error(f"Build failed: {e}")
        print(f"\nError: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Build interrupted by user")
        print("\nBuild interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
