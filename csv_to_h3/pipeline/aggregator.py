"""Per-cell statistics over numeric columns.

Each group of rows sharing an H3 cell collapses into one record holding the
cell index plus one value per configured column.  Values are parsed with the
same ``parseFloat`` rules as coordinates; anything unparseable becomes NaN and
propagates into sum/mean/median/max/min.  There is no skip-invalid filter:
NaN in the output is how data-quality problems get surfaced.
"""

import logging
import math
from collections.abc import Callable, Mapping, Sequence

from csv_to_h3.models.dataset import CELL_COLUMN, AggregationFunction, ExportRecord, Row
from csv_to_h3.pipeline.validator import parse_float

logger = logging.getLogger(__name__)


def _sum(values: Sequence[float]) -> float:
    # Plain left-to-right accumulation; builtin sum() compensates on 3.12+.
    total = 0.0
    for value in values:
        total += value
    return total


def _mean(values: Sequence[float]) -> float:
    return _sum(values) / len(values)


def _median(values: Sequence[float]) -> float:
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def _max(values: Sequence[float]) -> float:
    if any(math.isnan(v) for v in values):
        return math.nan
    return max(values)


def _min(values: Sequence[float]) -> float:
    if any(math.isnan(v) for v in values):
        return math.nan
    return min(values)


def _count(values: Sequence[float]) -> int:
    return len(values)


AGGREGATORS: dict[AggregationFunction, Callable[[Sequence[float]], float | int]] = {
    AggregationFunction.SUM: _sum,
    AggregationFunction.MEAN: _mean,
    AggregationFunction.MEDIAN: _median,
    AggregationFunction.MAX: _max,
    AggregationFunction.MIN: _min,
    AggregationFunction.COUNT: _count,
}


def column_values(rows: Sequence[Row], column: str) -> list[float]:
    """Parsed values of ``column`` across ``rows``; one entry per row, NaN on failure."""
    return [parse_float(row.get(column)) for row in rows]


def apply_function(func: AggregationFunction | str, values: Sequence[float]) -> float | int:
    """Run a single aggregation function over ``values``.

    Raises:
        ValueError: If ``func`` is not a known aggregation function name.
    """
    return AGGREGATORS[AggregationFunction(func)](values)


def aggregate_group(
    cell: str,
    rows: Sequence[Row],
    numeric_columns: Sequence[str],
    aggregation_settings: Mapping[str, AggregationFunction | str | None],
) -> ExportRecord:
    """Collapse one cell's rows into a single record.

    Columns are emitted in ``numeric_columns`` order; columns without a
    configured function are left out.
    """
    record: ExportRecord = {CELL_COLUMN: cell}
    for column in numeric_columns:
        func = aggregation_settings.get(column)
        if not func:
            continue
        record[column] = apply_function(func, column_values(rows, column))
    return record


def aggregate_groups(
    groups: Mapping[str, Sequence[Row]],
    numeric_columns: Sequence[str],
    aggregation_settings: Mapping[str, AggregationFunction | str | None],
) -> list[ExportRecord]:
    """One aggregated record per group, in the groups' iteration order."""
    records = [
        aggregate_group(cell, rows, numeric_columns, aggregation_settings)
        for cell, rows in groups.items()
    ]
    logger.info(
        "Aggregated %d H3 cells over %d configured columns",
        len(records),
        sum(1 for column in numeric_columns if aggregation_settings.get(column)),
    )
    return records
