"""Occupancy report: how many records land in each H3 cell.

A low minimum count at the chosen resolution means some cells still single
out individual records.
"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from csv_to_h3.models.dataset import OccupancyReport, Row
from csv_to_h3.pipeline.grouping import group_by_cell
from csv_to_h3.pipeline.h3_indexer import H3_RESOLUTION


def format_fixed(value: float, digits: int = 2) -> str:
    """Format like JavaScript ``toFixed``: exact binary value, ties away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def occupancy_from_counts(counts: Sequence[int]) -> OccupancyReport:
    """Build the report from per-cell record counts."""
    if not counts:
        return OccupancyReport(min=0, max=0, avg=format_fixed(0.0), cell_count=0, row_count=0)

    total = sum(counts)
    return OccupancyReport(
        min=min(counts),
        max=max(counts),
        avg=format_fixed(total / len(counts)),
        cell_count=len(counts),
        row_count=total,
    )


def cell_occupancy(rows: Sequence[Row], resolution: int = H3_RESOLUTION) -> OccupancyReport:
    """Min/max/average record count per occupied cell at ``resolution``."""
    groups = group_by_cell(rows, resolution)
    return occupancy_from_counts([len(members) for members in groups.values()])
