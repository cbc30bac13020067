"""Thin wrapper over the h3 library: coordinates -> cell, cell -> boundary.

Resolution 7 is the default: average hexagon area is about 5.16 km² and edge
length about 1.22 km, coarse enough to blur individual addresses in most
urban datasets.

Range checking of coordinates and resolution is left to h3 itself.
"""

import h3

from csv_to_h3.core.config import settings
from csv_to_h3.models.dataset import Row
from csv_to_h3.pipeline.validator import row_coordinates

H3_RESOLUTION = settings.h3_resolution


def cell_identifier(lat: float, lon: float, resolution: int = H3_RESOLUTION) -> str:
    """H3 cell index (hex string) containing the point at ``resolution``."""
    return h3.latlng_to_cell(lat, lon, resolution)


def cell_boundary(cell: str) -> tuple[tuple[float, float], ...]:
    """Ordered (lat, lon) vertices of a cell's boundary polygon."""
    return tuple(h3.cell_to_boundary(cell))


def row_cell(row: Row, resolution: int = H3_RESOLUTION) -> str:
    """Cell of a validated row, parsed fresh from its raw lat/lon strings."""
    lat, lon = row_coordinates(row)
    return cell_identifier(lat, lon, resolution)
