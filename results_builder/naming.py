"""
File name grammars for result files and logo assets.

Result files:  <year>-<qualifier>_<tournament_name_segments>_<division>.<ext>
Logo assets:   [<minimum_year>_]<tournament_name_segments>[_<division>].<ext>
"""

import re
from pathlib import Path

from .exceptions import MalformedFileNameError
from .models import LogoAsset, ResultFileIdentity

_UNSIGNED = re.compile(r"[0-9]+")


def _parse_unsigned(token: str) -> int | None:
    if _UNSIGNED.fullmatch(token) is None:
        return None
    return int(token)


def parse_result_file_name(file_name: str) -> ResultFileIdentity:
    """
    Parse a result file name into its year, division and tournament name.

    `2021-04-01_regional_x_b.yaml` gives year 2021, tournament `regional_x`
    and division `b`. The token after the first underscore-split is kept
    whole, so tournament names may contain underscores.

    Raises:
        MalformedFileNameError: If the leading year or the
            `_<tournament>_<division>` suffix is missing
    """
    year_token, dash, _ = file_name.partition("-")
    if not dash:
        raise MalformedFileNameError(file_name, "missing '-' after leading year")
    year = _parse_unsigned(year_token)
    if year is None:
        raise MalformedFileNameError(file_name, f"leading token {year_token!r} is not a year")

    _, underscore, tail = file_name.partition("_")
    if not underscore:
        raise MalformedFileNameError(file_name, "missing '_' after date qualifier")

    tournament_name, underscore, trailing = tail.rpartition("_")
    if not underscore:
        raise MalformedFileNameError(file_name, "missing '_<division>' suffix")
    if not tournament_name:
        raise MalformedFileNameError(file_name, "empty tournament name")

    division = trailing.partition(".")[0]
    return ResultFileIdentity(year=year, division=division, tournament_name=tournament_name)


def parse_logo_file_name(path: Path) -> LogoAsset:
    """
    Parse a logo file name into a catalog entry.

    A leading non-zero number is the minimum year (0 otherwise); a trailing
    single-character segment is the division (absent otherwise); whatever
    lies between is the tournament name.

    Raises:
        MalformedFileNameError: If no tournament name remains
    """
    splits = path.stem.split("_")

    minimum_year = _parse_unsigned(splits[0]) or 0
    start_index = 1 if minimum_year else 0

    if len(splits[-1]) == 1:
        division: str | None = splits[-1]
        name_segments = splits[start_index:-1]
    else:
        division = None
        name_segments = splits[start_index:]

    tournament_name = "_".join(name_segments)
    if not tournament_name:
        raise MalformedFileNameError(path.name, "no tournament name in logo file name")

    return LogoAsset(
        division=division,
        minimum_year=minimum_year,
        path=path,
        tournament_name=tournament_name,
    )
