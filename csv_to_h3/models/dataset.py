"""Value types flowing through the indexing and aggregation pipeline."""

import enum
from dataclasses import dataclass
from typing import Mapping

# A record as decoded by the external tabular codec: column name -> raw string.
# Short rows may yield None for trailing columns.
Row = Mapping[str, str | None]

# An output record: column name -> string, int, or float (possibly NaN).
ExportRecord = dict[str, object]

LAT_COLUMN = "lat"
LON_COLUMN = "lon"
CELL_COLUMN = "h3Index"


class AggregationFunction(str, enum.Enum):
    SUM = "sum"
    MEAN = "mean"
    MEDIAN = "median"
    MAX = "max"
    MIN = "min"
    COUNT = "count"


class ExportMode(str, enum.Enum):
    ENRICHED = "enriched"
    AGGREGATED = "aggregated"


@dataclass(frozen=True)
class ImportResult:
    """Rows accepted by the validator plus the detected numeric columns."""

    rows: tuple[Row, ...]
    numeric_columns: tuple[str, ...]
    rejected_count: int = 0


@dataclass(frozen=True)
class OccupancyReport:
    """Record counts per H3 cell, used to judge whether a resolution anonymizes enough.

    ``avg`` is pre-formatted to two decimals for display.
    """

    min: int
    max: int
    avg: str
    cell_count: int
    row_count: int
