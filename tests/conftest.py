"""Shared test fixtures for the csv_to_h3 test suite.

Rows are built as the external CSV codec would hand them over: plain dicts of
column name -> raw string, with ``lat``/``lon`` first.  Points that must share
a cell use identical coordinates so the tests never depend on cell edges.
"""

import pytest

from csv_to_h3.models.schemas import ExportOptions
from csv_to_h3.services.session import H3Session


# ── Reference coordinates ─────────────────────────────────────────────────────

NYC = ("40.7128", "-74.0060")
LA = ("34.0522", "-118.2437")
CHICAGO = ("41.8781", "-87.6298")
LONDON = ("51.5074", "-0.1278")


# ── Factory helpers ───────────────────────────────────────────────────────────


def make_row(location: tuple[str, str] = NYC, **fields: str) -> dict[str, str]:
    """Create a decoded CSV row at ``location`` with extra string columns."""
    lat, lon = location
    return {"lat": lat, "lon": lon, **fields}


def make_rows(locations: list[tuple[str, str]], **columns: list[str]) -> list[dict[str, str]]:
    """Create one row per location; ``columns`` maps column name -> per-row values."""
    rows = []
    for i, location in enumerate(locations):
        rows.append(make_row(location, **{name: values[i] for name, values in columns.items()}))
    return rows


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_rows() -> list[dict[str, str]]:
    """Five rows across two cities: LA first, then NYC, then LA again."""
    return make_rows(
        [LA, NYC, LA, NYC, NYC],
        id=["a", "b", "c", "d", "e"],
        price=["10", "20", "30", "40", "60"],
        visits=["1", "2", "3", "4", "5"],
    )


@pytest.fixture
def options() -> ExportOptions:
    return ExportOptions(resolution=7, include_coordinates=True)


@pytest.fixture
def session(sample_rows, options) -> H3Session:
    """A session with ``sample_rows`` loaded at resolution 7."""
    s = H3Session(options=options)
    s.load(sample_rows)
    return s
