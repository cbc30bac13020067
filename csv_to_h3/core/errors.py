"""Error taxonomy for rejected imports.

Each error carries a stable ``code`` so a UI collaborator can map it to a
user-facing notice without parsing the message:

    MISSING_REQUIRED_COLUMNS  first row has no "lat" or no "lon" key
    NO_VALID_COORDINATES      every row failed lat/lon parsing

Non-numeric values in numeric columns are *not* errors; they surface as NaN
in aggregated output.
"""

from __future__ import annotations


class CsvToH3Error(Exception):
    """Base class for all csv_to_h3 errors."""

    code: str = "ERROR"
    default_message: str = "csv_to_h3 error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class ImportRejectedError(CsvToH3Error):
    """The whole import was rejected; no rows were accepted."""

    code = "IMPORT_REJECTED"
    default_message = "Import rejected"


class MissingRequiredColumnsError(ImportRejectedError):
    code = "MISSING_REQUIRED_COLUMNS"
    default_message = 'CSV must contain at least "lat" and "lon" columns'


class NoValidCoordinatesError(ImportRejectedError):
    code = "NO_VALID_COORDINATES"
    default_message = "No valid lat/lon pairs found in the CSV"
