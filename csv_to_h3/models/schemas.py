"""Pydantic schemas for the runtime-mutable export options."""

from pydantic import BaseModel, Field

from csv_to_h3.core.config import settings
from csv_to_h3.models.dataset import AggregationFunction

MIN_RESOLUTION = 0
MAX_RESOLUTION = 15


class ExportOptions(BaseModel):
    """User-chosen resolution, coordinate inclusion and per-column functions."""

    resolution: int = Field(
        default_factory=lambda: settings.h3_resolution,
        ge=MIN_RESOLUTION,
        le=MAX_RESOLUTION,
        description="H3 resolution (0 = coarsest, 15 = finest)",
    )
    include_coordinates: bool = Field(
        default_factory=lambda: settings.include_coordinates,
        description="Keep lat/lon columns in enriched exports",
    )
    aggregation_settings: dict[str, AggregationFunction] = Field(
        default_factory=dict,
        description="Numeric column -> aggregation function; unset columns are omitted",
    )

    model_config = {"validate_assignment": True}
