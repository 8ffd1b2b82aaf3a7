"""
Abstract base classes defining the interfaces for the results builder.

All interfaces are synchronous; the orchestrator decides what runs in a pool.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from .models import ResultFile

if TYPE_CHECKING:
    from .templates import Templates


RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Event:
    """An event as exposed by a result interpreter."""

    name: str
    trial: bool = False


@dataclass(frozen=True)
class Team:
    """A team as exposed by a result interpreter."""

    school: str
    state: str
    number: int
    city: str | None = None
    suffix: str | None = None


@dataclass(frozen=True)
class HTMLOptions:
    """Rendering options for a result page."""

    color: str = "#303030"
    logo: str | None = None
    hide_raw: bool = False
    date_added: datetime | None = None


class ResultFetcher(ABC):
    """Interface for enumerating result files."""

    @abstractmethod
    def list_results(self) -> Iterable[ResultFile]:
        """Return all available result files in a stable order."""
        pass


class LogoSource(ABC):
    """Interface for an image that can be reduced to one average pixel."""

    @abstractmethod
    def rasterize_to_single_average_pixel(self) -> RGB:
        """
        Downsample the whole image to one pixel.

        Raises:
            ImageDecodeError: If the image cannot be decoded or rasterized
        """
        pass


class Interpreter(ABC):
    """Interface for structured access to one tournament's result data."""

    @abstractmethod
    def events(self) -> Sequence[Event]:
        """Return the tournament's events."""
        pass

    @abstractmethod
    def teams(self) -> Sequence[Team]:
        """Return the tournament's teams."""
        pass

    @abstractmethod
    def title(self) -> str:
        """Human-readable tournament title."""
        pass

    @abstractmethod
    def to_html(self, options: HTMLOptions, templates: "Templates") -> str:
        """Render a complete HTML document for the tournament."""
        pass


class HistoryResolver(ABC):
    """Interface for finding when a result file was first added."""

    @abstractmethod
    def resolve_added_date(self, file_name: str) -> datetime:
        """
        Return the date the result file was added.

        Never raises for missing history; implementations fall back to a
        fixed "now" and log a warning.
        """
        pass
