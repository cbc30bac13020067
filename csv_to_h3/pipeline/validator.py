"""Filter decoded CSV rows to those with usable coordinates and detect numeric columns.

Coordinate parsing mirrors JavaScript ``parseFloat``: leading whitespace is
skipped and the longest numeric prefix wins, so ``"12.5abc"`` parses as 12.5
while ``"abc"`` parses as NaN.  A row is kept only if both ``lat`` and ``lon``
parse to finite numbers.

Numeric columns are detected from the first valid row only.  A column that is
numeric in that row but not in later rows is still treated as numeric; its
aggregates will come out as NaN.
"""

import logging
import math
import re
from collections.abc import Sequence

from csv_to_h3.core.errors import MissingRequiredColumnsError, NoValidCoordinatesError
from csv_to_h3.models.dataset import LAT_COLUMN, LON_COLUMN, ImportResult, Row

logger = logging.getLogger(__name__)

_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.ASCII,
)

# No exponent, no leading "+", no thousands separators.
_NUMBER_PATTERN = re.compile(r"-?\d*\.?\d+", re.ASCII)


def parse_float(value: object) -> float:
    """Parse the leading number of ``value``; NaN if there is none or it is not a string."""
    if not isinstance(value, str):
        return math.nan
    # Any Unicode whitespace (e.g. U+00A0) may precede the number.
    match = _FLOAT_PREFIX.match(value.lstrip())
    if match is None:
        return math.nan
    return float(match.group(0))


def is_valid_number(value: object) -> bool:
    """True if the whole trimmed string is a plain decimal number."""
    if not isinstance(value, str):
        return False
    value = value.strip()
    if value == "":
        return False
    return _NUMBER_PATTERN.fullmatch(value) is not None and not math.isnan(parse_float(value))


def row_coordinates(row: Row) -> tuple[float, float]:
    """Parsed (lat, lon) of a row; either may be NaN or infinite."""
    return parse_float(row.get(LAT_COLUMN)), parse_float(row.get(LON_COLUMN))


def has_valid_coordinates(row: Row) -> bool:
    lat, lon = row_coordinates(row)
    return math.isfinite(lat) and math.isfinite(lon)


def detect_numeric_columns(row: Row) -> tuple[str, ...]:
    """Columns of ``row`` (other than lat/lon) holding a numeric value, in column order."""
    return tuple(
        column
        for column, value in row.items()
        if column not in (LAT_COLUMN, LON_COLUMN) and is_valid_number(value)
    )


def validate_rows(rows: Sequence[Row]) -> ImportResult:
    """Validate a decoded dataset.

    Args:
        rows: Header-keyed rows from the tabular codec, in file order.

    Returns:
        ImportResult with the valid rows (order preserved, copied) and the
        numeric columns detected from the first valid row.

    Raises:
        MissingRequiredColumnsError: If there are no rows, or the first row
            lacks a ``lat`` or ``lon`` key.
        NoValidCoordinatesError: If no row has parseable, finite coordinates.
    """
    if not rows or LAT_COLUMN not in rows[0] or LON_COLUMN not in rows[0]:
        raise MissingRequiredColumnsError()

    valid = tuple(dict(row) for row in rows if has_valid_coordinates(row))
    if not valid:
        raise NoValidCoordinatesError()

    numeric_columns = detect_numeric_columns(valid[0])

    logger.info(
        "Validated %d of %d rows (%d numeric columns)",
        len(valid),
        len(rows),
        len(numeric_columns),
    )
    return ImportResult(
        rows=valid,
        numeric_columns=numeric_columns,
        rejected_count=len(rows) - len(valid),
    )
