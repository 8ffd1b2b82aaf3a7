"""
Core dataclasses for the results builder.

Defines result files, logo assets, theme colors and tournament records.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from .exceptions import ValidationError

if TYPE_CHECKING:
    from .interfaces import Interpreter


@dataclass(frozen=True)
class ResultFile:
    """A tournament result data file, treated as opaque until interpreted."""

    name: str
    file_path: Path

    def __post_init__(self) -> None:
        """Validate result file data."""
        if not self.name:
            raise ValidationError("name cannot be empty")
        if not str(self.file_path):
            raise ValidationError("file_path cannot be empty")


@dataclass(frozen=True)
class ResultFileIdentity:
    """Year, division and tournament name parsed from a result file name."""

    year: int
    division: str
    tournament_name: str


@dataclass(frozen=True)
class LogoAsset:
    """
    A logo image applicable to one tournament.

    Catalog order comes from sort_key(): division (absent sorts lowest),
    then minimum year, then path as a final tie-break.
    """

    division: str | None
    minimum_year: int
    path: Path
    tournament_name: str

    def __post_init__(self) -> None:
        """Validate logo asset data."""
        if self.minimum_year < 0:
            raise ValidationError(f"minimum_year cannot be negative, got {self.minimum_year}")
        if self.division is not None and len(self.division) != 1:
            raise ValidationError(f"division must be a single character, got {self.division!r}")

    def sort_key(self) -> tuple[bool, str, int, str]:
        """Key that orders absent divisions below every present one."""
        return (self.division is not None, self.division or "", self.minimum_year, str(self.path))

    def applies_to(self, identity: ResultFileIdentity) -> bool:
        """Whether this asset covers the given result file's division and year."""
        division_ok = self.division is None or self.division == identity.division
        return division_ok and self.minimum_year <= identity.year


@dataclass(frozen=True)
class ThemeColor:
    """An RGB background color for a tournament's report page."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        """Validate channel ranges."""
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValidationError(f"color channel out of range: {channel}")

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def __str__(self) -> str:
        return self.hex


@dataclass(frozen=True)
class ResolvedLogo:
    """Logo chosen for a result file; `asset` is None for the default logo."""

    path: Path
    theme_color: ThemeColor
    asset: LogoAsset | None = None

    @property
    def is_default(self) -> bool:
        return self.asset is None


@dataclass(frozen=True)
class TournamentRecord:
    """Everything known about one result file after ingestion."""

    source: ResultFile
    identity: ResultFileIdentity
    interpreter: "Interpreter"
    logo: ResolvedLogo
    date_added: datetime | None = None

    @property
    def page_name(self) -> str:
        """File name of the generated HTML page (same stem, .html)."""
        return f"{Path(self.source.name).stem}.html"
