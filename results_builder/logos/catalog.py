"""
Logo catalog.

Scans a logo directory once and groups assets by tournament name, each group
ordered most specific first: division-qualified before division-less, then
newest minimum year first.
"""

from collections import defaultdict
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path

from ..exceptions import MalformedFileNameError
from ..logging_config import get_logger
from ..models import LogoAsset
from ..naming import parse_logo_file_name

logger = get_logger("logo_catalog")


class LogoCatalog(Mapping[str, Sequence[LogoAsset]]):
    """Read-only mapping from tournament name to priority-ordered logo assets."""

    def __init__(self, entries: Mapping[str, Sequence[LogoAsset]]):
        self._entries: dict[str, tuple[LogoAsset, ...]] = {
            name: tuple(sorted(assets, key=LogoAsset.sort_key, reverse=True))
            for name, assets in entries.items()
        }

    def __getitem__(self, tournament_name: str) -> Sequence[LogoAsset]:
        return self._entries[tournament_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def candidates(self, tournament_name: str) -> Sequence[LogoAsset]:
        """Assets for a tournament, most specific first; empty if unknown."""
        return self._entries.get(tournament_name, ())

    def asset_count(self) -> int:
        return sum(len(assets) for assets in self._entries.values())


def build_catalog(logo_directory: Path, strict: bool = True) -> LogoCatalog:
    """
    Build the logo catalog from every regular file in `logo_directory`.

    Args:
        logo_directory: Directory holding logo images
        strict: If False, skip (with a warning) files whose names carry no
            tournament name instead of raising

    Raises:
        OSError: If the directory does not exist or cannot be listed
        MalformedFileNameError: If `strict` and a logo name has no tournament name
    """
    logo_directory = Path(logo_directory)
    if not logo_directory.exists():
        raise FileNotFoundError(f"Logo directory does not exist: {logo_directory}")
    if not logo_directory.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {logo_directory}")

    buckets = defaultdict[str, list[LogoAsset]](list)
    for path in sorted(logo_directory.iterdir()):
        if not path.is_file():
            continue
        try:
            asset = parse_logo_file_name(path)
        except MalformedFileNameError as e:
            if strict:
                raise
            logger.warning(f"Skipping logo: {e}")
            continue
        buckets[asset.tournament_name].append(asset)

    catalog = LogoCatalog(buckets)
    logger.info(
        f"Loaded {catalog.asset_count()} logos for {len(catalog)} tournaments from {logo_directory}"
    )
    return catalog
