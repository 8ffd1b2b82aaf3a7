"""
Output artifacts.

Writes one HTML page per tournament record, the canonical event and school
name CSVs, and the results index page.
"""

import csv
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from .interfaces import HTMLOptions
from .logging_config import get_logger
from .models import TournamentRecord
from .templates import INDEX_TEMPLATE, Templates

logger = get_logger("output")

SEPARATOR = "-" * 60


def print_banner(message: str) -> None:
    print(SEPARATOR)
    print(message)
    print(SEPARATOR)


def relative_href(target: Path, output_dir: Path) -> str:
    """Link from a page in `output_dir` to `target`, with forward slashes."""
    return Path(os.path.relpath(Path(target).resolve(), Path(output_dir).resolve())).as_posix()


def html_options(record: TournamentRecord, output_dir: Path, hide_raw: bool = False) -> HTMLOptions:
    return HTMLOptions(
        color=record.logo.theme_color.hex,
        logo=relative_href(record.logo.path, output_dir),
        hide_raw=hide_raw,
        date_added=record.date_added,
    )


def write_result_pages(
    records: Sequence[TournamentRecord],
    output_dir: Path,
    templates: Templates,
    hide_raw: bool = False,
) -> list[Path]:
    """Render and write `<stem>.html` for every record."""
    written = list[Path]()
    for record in records:
        path = Path(output_dir) / record.page_name
        logger.info(f"Writing to {path}")
        print(f"Writing to {path}...")
        html = record.interpreter.to_html(html_options(record, output_dir, hide_raw), templates)
        path.write_text(html, encoding="utf-8")
        written.append(path)

    print_banner("Results pages complete.")
    return written


def collect_canonical_names(
    records: Iterable[TournamentRecord],
) -> tuple[list[tuple[str]], list[tuple[str, str, str]]]:
    """Sorted, de-duplicated event names and (school, city, state) triples."""
    events = set[tuple[str]]()
    schools = set[tuple[str, str, str]]()

    for record in records:
        for event in record.interpreter.events():
            events.add((event.name,))
        for team in record.interpreter.teams():
            schools.add((team.school, team.city or "", team.state))

    return sorted(events), sorted(schools)


def _write_csv(path: Path, rows: Iterable[Sequence[str]]) -> None:
    logger.info(f"Writing to {path}")
    print(f"Writing to {path}...")
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerows(rows)


def write_canonical_names(records: Sequence[TournamentRecord], output_dir: Path) -> tuple[Path, Path]:
    """Write `events.csv` (one column) and `schools.csv` (school, city, state)."""
    print("Collecting canonical event and school names...")
    events, schools = collect_canonical_names(records)

    events_path = Path(output_dir) / "events.csv"
    schools_path = Path(output_dir) / "schools.csv"
    _write_csv(events_path, events)
    _write_csv(schools_path, schools)
    logger.info(f"Collected {len(events)} event names and {len(schools)} schools")

    print_banner("Canonical names CSV pages complete.")
    return events_path, schools_path


def index_entries(records: Sequence[TournamentRecord], output_dir: Path) -> list[dict[str, str]]:
    """Index rows, most recently added first, then by file name."""
    ordered = sorted(records, key=lambda r: r.source.name)
    ordered.sort(key=lambda r: r.date_added.timestamp() if r.date_added else float("-inf"), reverse=True)
    return [
        {
            "title": record.interpreter.title(),
            "page": record.page_name,
            "logo": relative_href(record.logo.path, output_dir),
            "color": record.logo.theme_color.hex,
            "date_added": record.date_added.strftime("%Y-%m-%d") if record.date_added else "",
        }
        for record in ordered
    ]


def write_results_index(records: Sequence[TournamentRecord], output_dir: Path, templates: Templates) -> Path:
    path = Path(output_dir) / "index.html"
    logger.info(f"Writing to {path}")
    print(f"Writing to {path}...")
    path.write_text(
        templates.render(INDEX_TEMPLATE, entries=index_entries(records, output_dir)),
        encoding="utf-8",
    )
    return path
