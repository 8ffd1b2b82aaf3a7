"""
SciolyFF result interpreter.

Reads a tournament result file in the SciolyFF YAML layout (`Tournament`,
`Events`, `Teams`, `Placings`, optional `Penalties`) and renders it as an
HTML results page.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

import yaml
from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from typing_extensions import NotRequired, TypedDict, override

from ..exceptions import InterpreterError
from ..interfaces import Event, HTMLOptions, Interpreter, Team
from ..logging_config import get_logger
from ..templates import RESULT_TEMPLATE, Templates

logger = get_logger("sciolyff")


TournamentSection = TypedDict(
    "TournamentSection",
    {
        "name": str,
        "short name": NotRequired[str],
        "location": NotRequired[str],
        "level": NotRequired[str],
        "state": NotRequired[str],
        "division": str,
        "year": int,
        "date": NotRequired[date],
    },
)


class EventEntry(TypedDict):
    name: str
    trial: NotRequired[bool]


class TeamEntry(TypedDict):
    number: int
    school: str
    state: str
    city: NotRequired[str]
    suffix: NotRequired[str]


class PlacingEntry(TypedDict):
    event: str
    team: int
    place: NotRequired[int]
    participated: NotRequired[bool]
    disqualified: NotRequired[bool]
    exempt: NotRequired[bool]


class PenaltyEntry(TypedDict):
    team: int
    points: int


ResultDocument = TypedDict(
    "ResultDocument",
    {
        "Tournament": TournamentSection,
        "Events": list[EventEntry],
        "Teams": list[TeamEntry],
        "Placings": NotRequired[list[PlacingEntry]],
        "Penalties": NotRequired[list[PenaltyEntry]],
    },
)

_DOCUMENT_ADAPTER = TypeAdapter(ResultDocument)


@dataclass(frozen=True)
class TeamStanding:
    """One row of the rendered results table."""

    rank: int
    team: Team
    points: dict[str, int]
    penalties: int
    total: int

    @property
    def display_name(self) -> str:
        if self.team.suffix:
            return f"{self.team.school} {self.team.suffix}"
        return self.team.school

    @property
    def location(self) -> str:
        if self.team.city:
            return f"{self.team.city}, {self.team.state}"
        return self.team.state


class SciolyffInterpreter(Interpreter):
    """Interpreter for SciolyFF YAML result files."""

    def __init__(self, document: ResultDocument):
        self.document: ResultDocument = document
        self.tournament: TournamentSection = document["Tournament"]
        self._events = tuple(
            Event(name=entry["name"], trial=entry.get("trial", False))
            for entry in document["Events"]
        )
        self._teams = tuple(
            Team(
                school=entry["school"],
                state=entry["state"],
                number=entry["number"],
                city=entry.get("city"),
                suffix=entry.get("suffix"),
            )
            for entry in document["Teams"]
        )
        self._validate_references()

    @classmethod
    def from_yaml(cls, text: str) -> "SciolyffInterpreter":
        """
        Parse and validate SciolyFF YAML.

        Raises:
            InterpreterError: If the text is not YAML or does not match the layout
        """
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise InterpreterError(f"Result file is not valid YAML: {e}") from e

        try:
            document = _DOCUMENT_ADAPTER.validate_python(raw)
        except PydanticValidationError as e:
            raise InterpreterError(f"Result file does not match the result layout: {e}") from e

        return cls(document)

    def _validate_references(self) -> None:
        event_names = {event.name for event in self._events}
        team_numbers = {team.number for team in self._teams}
        if len(team_numbers) != len(self._teams):
            raise InterpreterError("Team numbers must be unique")

        for placing in self.document.get("Placings", []):
            if placing["event"] not in event_names:
                raise InterpreterError(f"Placing references unknown event {placing['event']!r}")
            if placing["team"] not in team_numbers:
                raise InterpreterError(f"Placing references unknown team {placing['team']}")
        for penalty in self.document.get("Penalties", []):
            if penalty["team"] not in team_numbers:
                raise InterpreterError(f"Penalty references unknown team {penalty['team']}")

    @override
    def events(self) -> Sequence[Event]:
        return self._events

    @override
    def teams(self) -> Sequence[Team]:
        return self._teams

    @override
    def title(self) -> str:
        name = self.tournament["name"]
        return f"{self.tournament['year']} {name} (Div. {self.tournament['division']})"

    def _placing_points(self, placing: PlacingEntry) -> int:
        team_count = len(self._teams)
        if placing.get("exempt", False):
            return 0
        if placing.get("disqualified", False):
            return team_count + 2
        if not placing.get("participated", True):
            return team_count + 1
        return placing.get("place", team_count)

    def standings(self) -> list[TeamStanding]:
        """
        Teams ordered by total points, lowest first.

        Totals are the sum of placing points in non-trial events plus
        penalties; ties go to the team with more first places, then the
        lower team number.
        """
        scored_events = {event.name for event in self._events if not event.trial}
        points = {team.number: dict[str, int]() for team in self._teams}
        firsts = {team.number: 0 for team in self._teams}

        for placing in self.document.get("Placings", []):
            value = self._placing_points(placing)
            points[placing["team"]][placing["event"]] = value
            if placing.get("place") == 1 and placing["event"] in scored_events:
                firsts[placing["team"]] += 1

        penalties = {team.number: 0 for team in self._teams}
        for penalty in self.document.get("Penalties", []):
            penalties[penalty["team"]] += penalty["points"]

        totals = {
            number: sum(v for event, v in event_points.items() if event in scored_events)
            + penalties[number]
            for number, event_points in points.items()
        }
        ordered = sorted(self._teams, key=lambda t: (totals[t.number], -firsts[t.number], t.number))

        return [
            TeamStanding(
                rank=rank,
                team=team,
                points=points[team.number],
                penalties=penalties[team.number],
                total=totals[team.number],
            )
            for rank, team in enumerate(ordered, 1)
        ]

    @override
    def to_html(self, options: HTMLOptions, templates: Templates) -> str:
        logger.debug(f"Rendering {self.title()} with color {options.color}")
        return templates.render(
            RESULT_TEMPLATE,
            title=self.title(),
            tournament=self.tournament,
            events=self._events,
            standings=self.standings(),
            options=options,
        )
