"""Partition validated rows by H3 cell, preserving first-seen order."""

import logging
from collections import defaultdict
from collections.abc import Iterable

from csv_to_h3.models.dataset import Row
from csv_to_h3.pipeline.h3_indexer import H3_RESOLUTION, row_cell

logger = logging.getLogger(__name__)


def group_by_cell(rows: Iterable[Row], resolution: int = H3_RESOLUTION) -> dict[str, list[Row]]:
    """Map each H3 cell to the rows falling inside it.

    Keys appear in the order their cell is first encountered; rows within a
    group keep their input order.
    """
    groups: dict[str, list[Row]] = defaultdict(list)
    row_count = 0
    for row in rows:
        groups[row_cell(row, resolution)].append(row)
        row_count += 1

    logger.info(
        "Grouped %d rows into %d H3 cells (res %d)",
        row_count,
        len(groups),
        resolution,
    )
    return dict(groups)


def unique_cells(rows: Iterable[Row], resolution: int = H3_RESOLUTION) -> list[str]:
    """Distinct cells occupied by ``rows``, in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        seen.setdefault(row_cell(row, resolution), None)
    return list(seen)
