"""Assign tabular point records to H3 cells and aggregate them per cell."""

__version__ = "0.1.0"
