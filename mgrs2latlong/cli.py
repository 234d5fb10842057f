from __future__ import annotations

import argparse
import csv
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import load_settings
from .csv_io import open_output, open_table, write_table
from .logging_setup import configure_logging
from .pipeline import PipelineError, PipelineStats, geocode_rows, output_header

logger = logging.getLogger("mgrs2latlong")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mgrs2latlong",
        description="Convert MGRS coordinates to latitude/longitude in CSV files.",
    )
    ap.add_argument("input", help="Input CSV file path")
    ap.add_argument("-o", "--output", help="Output CSV file path (defaults to stdout)")
    ap.add_argument("--column", help="Name of the MGRS column (skips detection)")
    ap.add_argument("--sample-rows", type=int, help="Rows sampled for column detection (default 100, env MGRS_SAMPLE_ROWS)")
    ap.add_argument("--decimals", type=int, help="Round coordinates to this many decimals (env MGRS_DECIMALS)")
    ap.add_argument("--strict", action="store_true", help="Fail on the first value that does not convert")
    ap.add_argument("--require-column", action="store_true", help="Fail when no MGRS-like column is found")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging()

    sample_rows = args.sample_rows if args.sample_rows is not None else settings.sample_rows
    decimals = args.decimals if args.decimals is not None else settings.decimals
    if sample_rows < 1:
        print("error: --sample-rows must be at least 1", file=sys.stderr)
        return 2
    if decimals is not None and decimals < 0:
        print("error: --decimals must not be negative", file=sys.stderr)
        return 2

    stats = PipelineStats()
    try:
        with open_table(args.input) as (header, rows):
            out_rows = geocode_rows(
                header,
                rows,
                column=args.column,
                sample_size=sample_rows,
                strict=args.strict,
                require_column=args.require_column,
                decimals=decimals,
                stats=stats,
            )
            with open_output(args.output) as out:
                write_table(out, output_header(header), out_rows)
    except FileNotFoundError:
        print(f"error: failed to open input file: {args.input}", file=sys.stderr)
        return 1
    except PipelineError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (ValueError, csv.Error) as e:
        print(f"error: invalid CSV: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    logger.info(
        "processed %d records; MGRS column %s",
        stats.rows,
        repr(stats.column) if stats.column is not None else "not found",
        extra={"input": args.input, "converted": stats.converted, "blank": stats.blank, "failed": stats.failed},
    )
    return 0


__all__ = ["build_parser", "main"]
