"""Shared fixtures: a sample result document and a small results site tree."""

from pathlib import Path

import pytest
from loguru import logger
from PIL import Image

SAMPLE_RESULT = """\
Tournament:
  name: Regional X
  short name: Reg X
  location: Springfield
  state: IL
  level: Regionals
  division: {division}
  year: {year}
  date: {year}-04-01

Events:
  - name: Anatomy
  - name: Bridges
  - name: Drones
    trial: true

Teams:
  - number: 1
    school: Lincoln Middle School
    city: Springfield
    state: IL
  - number: 2
    school: Adams Academy
    state: IL
  - number: 3
    school: Lincoln Middle School
    suffix: B
    city: Springfield
    state: IL

Placings:
  - {{event: Anatomy, team: 1, place: 1}}
  - {{event: Anatomy, team: 2, place: 2}}
  - {{event: Anatomy, team: 3, place: 3}}
  - {{event: Bridges, team: 1, place: 2}}
  - {{event: Bridges, team: 2, place: 3}}
  - {{event: Bridges, team: 3, place: 1}}
  - {{event: Drones, team: 1, place: 3}}
  - {{event: Drones, team: 2, place: 1}}
  - {{event: Drones, team: 3, place: 2}}

Penalties:
  - {{team: 3, points: 3}}
"""


def sample_result(division: str = "B", year: int = 2021) -> str:
    return SAMPLE_RESULT.format(division=division, year=year)


def solid_png(path: Path, color: tuple[int, int, int], size: int = 8) -> Path:
    Image.new("RGB", (size, size), color).save(path)
    return path


@pytest.fixture
def sample_yaml() -> str:
    return sample_result()


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """
    A results checkout with three result files and three logos.

    - 2021-04-01_regional_x_b.yaml resolves to 2020_regional_x_b.png (dark blue)
    - 2021-04-02_regional_x_c.yaml resolves to 2020_regional_x.png (light yellow)
    - 2019-04-01_regional_x_b.yaml is older than every logo, so uses the default
    """
    results = tmp_path / "results"
    logos = tmp_path / "public" / "results" / "logos"
    results.mkdir()
    logos.mkdir(parents=True)

    (results / "2021-04-01_regional_x_b.yaml").write_text(sample_result("B", 2021))
    (results / "2021-04-02_regional_x_c.yaml").write_text(sample_result("C", 2021))
    (results / "2019-04-01_regional_x_b.yaml").write_text(sample_result("B", 2019))

    solid_png(logos / "default.png", (0x30, 0x30, 0x30))
    solid_png(logos / "2020_regional_x_b.png", (20, 40, 90))
    solid_png(logos / "2020_regional_x.png", (250, 220, 120))
    return tmp_path


@pytest.fixture
def reset_logging():
    """Remove loguru sinks added by setup_logging during a test."""
    yield
    logger.remove()
