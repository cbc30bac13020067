"""Assemble export records: enriched rows or per-cell aggregates.

Both modes return an ordered list of records sharing one field set, ready for
an external CSV serializer.

Enriched mode   -> every row in input order, plus ``h3Index``; ``lat``/``lon``
                   dropped when coordinates are excluded.
Aggregated mode -> one record per occupied cell in first-seen order, with
                   ``h3Index`` followed by each configured numeric column.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from csv_to_h3.models.dataset import (
    CELL_COLUMN,
    LAT_COLUMN,
    LON_COLUMN,
    AggregationFunction,
    ExportMode,
    ExportRecord,
    Row,
)
from csv_to_h3.models.schemas import ExportOptions
from csv_to_h3.pipeline.aggregator import aggregate_groups
from csv_to_h3.pipeline.grouping import group_by_cell
from csv_to_h3.pipeline.h3_indexer import H3_RESOLUTION, row_cell

logger = logging.getLogger(__name__)


def export_fields(records: Iterable[Mapping[str, object]]) -> list[str]:
    """Union of record keys in first-seen order."""
    fields: dict[str, None] = {}
    for record in records:
        for key in record:
            fields.setdefault(key, None)
    return list(fields)


def _uniform(records: list[ExportRecord]) -> list[ExportRecord]:
    fields = export_fields(records)
    uniform: list[ExportRecord] = []
    for record in records:
        uniform.append({field: "" if record.get(field) is None else record[field] for field in fields})
    return uniform


def enriched_records(
    rows: Sequence[Row],
    resolution: int = H3_RESOLUTION,
    include_coordinates: bool = True,
) -> list[ExportRecord]:
    """Original rows with their H3 cell appended.

    An existing ``h3Index`` column keeps its position and is overwritten.
    Source rows are never modified.
    """
    records: list[ExportRecord] = []
    for row in rows:
        record: ExportRecord = {**row, CELL_COLUMN: row_cell(row, resolution)}
        if not include_coordinates:
            record.pop(LAT_COLUMN, None)
            record.pop(LON_COLUMN, None)
        records.append(record)
    return _uniform(records)


def aggregated_records(
    rows: Sequence[Row],
    numeric_columns: Sequence[str],
    aggregation_settings: Mapping[str, AggregationFunction | str | None],
    resolution: int = H3_RESOLUTION,
) -> list[ExportRecord]:
    """One aggregated record per occupied cell."""
    groups = group_by_cell(rows, resolution)
    return aggregate_groups(groups, numeric_columns, aggregation_settings)


def assemble_export(
    rows: Sequence[Row],
    numeric_columns: Sequence[str],
    options: ExportOptions,
    mode: ExportMode = ExportMode.ENRICHED,
) -> list[ExportRecord]:
    """Build the export for ``mode`` using the current options."""
    mode = ExportMode(mode)
    if mode is ExportMode.AGGREGATED:
        records = aggregated_records(
            rows,
            numeric_columns,
            options.aggregation_settings,
            resolution=options.resolution,
        )
    else:
        records = enriched_records(
            rows,
            resolution=options.resolution,
            include_coordinates=options.include_coordinates,
        )

    logger.info(
        "Assembled %d %s records (res %d)",
        len(records),
        mode.value,
        options.resolution,
    )
    return records
