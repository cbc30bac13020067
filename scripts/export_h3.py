#!/usr/bin/env python3
"""CLI script to tag a CSV of points with H3 cells, or aggregate it per cell.

Usage:
    python scripts/export_h3.py --input points.csv --output out.csv --resolution 8
    python scripts/export_h3.py --input points.csv --output agg.csv \
        --aggregate price=median --aggregate visits=sum

This script:
1. Reads the CSV (header row required, must include "lat" and "lon").
   Fields beyond the header on ragged rows are dropped.
2. Drops rows without usable coordinates and detects numeric columns.
3. Prints the per-cell occupancy report for the chosen resolution.
4. Writes either the enriched rows or the per-cell aggregates.
"""

import argparse
import csv
import logging
import math
import sys
from decimal import Decimal
from pathlib import Path
from typing import IO

# Add the repository root to path so the script runs from an uninstalled checkout
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from csv_to_h3.core.config import settings
from csv_to_h3.core.errors import CsvToH3Error
from csv_to_h3.pipeline.export import export_fields
from csv_to_h3.services.session import H3Session

# DictReader key for fields past the end of the header
_OVERFLOW_KEY = "__parsed_extra"


def _read_rows(fh: IO[str]) -> list[dict[str, str | None]]:
    """Decode CSV rows keyed by header, discarding overflow fields."""
    rows = []
    for row in csv.DictReader(fh, restkey=_OVERFLOW_KEY):
        row.pop(_OVERFLOW_KEY, None)
        rows.append(row)
    return rows


def _js_number(value: float) -> str:
    """Number-to-string as JavaScript does it: shortest digits, exponent outside [1e-7, 1e21)."""
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # decimal point position relative to the digit string

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits
    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def _format_value(value: object) -> object:
    """Render numbers the way a browser-side CSV export would (3 not 3.0, NaN not nan)."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return _js_number(value)
    return value


def _parse_aggregations(pairs: list[str]) -> list[tuple[str, str]]:
    parsed = []
    for pair in pairs:
        column, sep, func = pair.partition("=")
        if not sep or not column or not func:
            raise ValueError(f"Expected COLUMN=FUNC, got {pair!r}")
        parsed.append((column, func))
    return parsed


def main():
    parser = argparse.ArgumentParser(description="Assign CSV points to H3 cells")
    parser.add_argument("--input", required=True, help="Input CSV with lat/lon columns")
    parser.add_argument("--output", default=None, help="Output CSV (default: stdout)")
    parser.add_argument(
        "--resolution", type=int, default=settings.h3_resolution, help="H3 resolution (0-15)"
    )
    parser.add_argument(
        "--no-coordinates", action="store_true", help="Drop lat/lon from enriched output"
    )
    parser.add_argument(
        "--aggregate",
        action="append",
        default=[],
        metavar="COLUMN=FUNC",
        help="Aggregate per cell; FUNC is sum, mean, median, max, min or count",
    )
    parser.add_argument("--stats", action="store_true", help="Only print the occupancy report")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    session = H3Session()
    try:
        aggregations = _parse_aggregations(args.aggregate)
        with open(args.input, newline="", encoding="utf-8") as fh:
            session.load(_read_rows(fh))
        session.set_resolution(args.resolution)
        session.set_include_coordinates(not args.no_coordinates)
        for column, func in aggregations:
            session.set_aggregation(column, func)
    except CsvToH3Error as exc:
        sys.exit(f"error: {exc.message}")
    except ValueError as exc:
        sys.exit(f"error: {exc}")

    report = session.occupancy()
    print(
        f"H3 res {session.options.resolution}: {report.row_count} points in {report.cell_count} cells "
        f"(min={report.min} max={report.max} avg={report.avg})",
        file=sys.stderr,
    )
    if args.stats:
        return

    records = session.export(aggregate=bool(aggregations))
    fields = export_fields(records)

    out = open(args.output, "w", newline="", encoding="utf-8") if args.output else sys.stdout
    try:
        writer = csv.DictWriter(out, fieldnames=fields)
        writer.writeheader()
        for record in records:
            writer.writerow({key: _format_value(value) for key, value in record.items()})
    finally:
        if out is not sys.stdout:
            out.close()


if __name__ == "__main__":
    main()
