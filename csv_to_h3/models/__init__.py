from csv_to_h3.models.dataset import (
    AggregationFunction,
    ExportMode,
    ExportRecord,
    ImportResult,
    OccupancyReport,
    Row,
)
from csv_to_h3.models.schemas import ExportOptions

__all__ = [
    "AggregationFunction",
    "ExportMode",
    "ExportOptions",
    "ExportRecord",
    "ImportResult",
    "OccupancyReport",
    "Row",
]
