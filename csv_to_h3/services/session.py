"""Application state for one loaded dataset.

The session owns the canonical row collection and the user's options; every
derived view (cells, occupancy, exports) is recomputed from them on each read.

1. ``load`` validates a decoded dataset and replaces the current one.
   A rejected import leaves the previous dataset untouched.
2. ``remove_point`` drops one row by position, replacing the row tuple.
3. ``set_resolution`` / ``set_include_coordinates`` / ``set_aggregation``
   update the options; aggregation choices survive resolution changes and
   are reset only by a new import.
4. ``cells``, ``occupancy`` and ``export`` derive results on demand.
"""

import logging
from collections.abc import Sequence

from csv_to_h3.core.errors import ImportRejectedError
from csv_to_h3.models.dataset import (
    AggregationFunction,
    ExportMode,
    ExportRecord,
    ImportResult,
    OccupancyReport,
    Row,
)
from csv_to_h3.models.schemas import ExportOptions
from csv_to_h3.pipeline.export import assemble_export, export_fields
from csv_to_h3.pipeline.grouping import unique_cells
from csv_to_h3.pipeline.h3_indexer import cell_boundary
from csv_to_h3.pipeline.occupancy import cell_occupancy
from csv_to_h3.pipeline.validator import row_coordinates, validate_rows

logger = logging.getLogger(__name__)


class H3Session:
    """Current dataset plus export options."""

    def __init__(self, options: ExportOptions | None = None) -> None:
        self.options = options or ExportOptions()
        self.rows: tuple[Row, ...] = ()
        self.numeric_columns: tuple[str, ...] = ()

    @property
    def has_data(self) -> bool:
        return bool(self.rows)

    # ── Mutations ─────────────────────────────────────────────────────────────

    def load(self, rows: Sequence[Row]) -> ImportResult:
        """Replace the dataset with the valid subset of ``rows``.

        Raises:
            MissingRequiredColumnsError: First row lacks ``lat`` or ``lon``.
            NoValidCoordinatesError: No row has usable coordinates.
        """
        try:
            result = validate_rows(rows)
        except ImportRejectedError as exc:
            logger.warning("Import rejected (%s): %s", exc.code, exc.message)
            raise

        self.rows = result.rows
        self.numeric_columns = result.numeric_columns
        self.options.aggregation_settings = {}
        if result.rejected_count:
            logger.info("Dropped %d rows without valid coordinates", result.rejected_count)
        return result

    def remove_point(self, index: int) -> Row:
        """Remove the row at ``index``; other rows keep their relative order."""
        if not 0 <= index < len(self.rows):
            raise IndexError(f"Point index {index} out of range (0..{len(self.rows) - 1})")
        removed = self.rows[index]
        self.rows = self.rows[:index] + self.rows[index + 1 :]
        return removed

    def set_resolution(self, resolution: int) -> None:
        """Raises pydantic.ValidationError outside 0..15."""
        self.options.resolution = resolution

    def set_include_coordinates(self, include: bool) -> None:
        self.options.include_coordinates = include

    def set_aggregation(self, column: str, func: AggregationFunction | str | None) -> None:
        """Choose (or clear, with ``None``/``""``) the function for a numeric column.

        Raises:
            ValueError: If ``column`` is not numeric or ``func`` is unknown.
        """
        if column not in self.numeric_columns:
            raise ValueError(f"Column {column!r} is not a numeric column")

        aggregation_settings = dict(self.options.aggregation_settings)
        if func:
            aggregation_settings[column] = AggregationFunction(func)
        else:
            aggregation_settings.pop(column, None)
        self.options.aggregation_settings = aggregation_settings

    # ── Derived views ─────────────────────────────────────────────────────────

    @property
    def map_center(self) -> tuple[float, float] | None:
        """Coordinates of the first row, or None when empty."""
        if not self.rows:
            return None
        return row_coordinates(self.rows[0])

    def cells(self) -> list[str]:
        return unique_cells(self.rows, self.options.resolution)

    def cell_boundaries(self) -> dict[str, tuple[tuple[float, float], ...]]:
        return {cell: cell_boundary(cell) for cell in self.cells()}

    def occupancy(self) -> OccupancyReport:
        return cell_occupancy(self.rows, self.options.resolution)

    def export(self, aggregate: bool = False) -> list[ExportRecord]:
        mode = ExportMode.AGGREGATED if aggregate else ExportMode.ENRICHED
        return assemble_export(self.rows, self.numeric_columns, self.options, mode)

    def export_fields(self, aggregate: bool = False) -> list[str]:
        """Column order for the export, usable as a CSV header."""
        return export_fields(self.export(aggregate))
