from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .detect import DEFAULT_SAMPLE_ROWS, detect
from .grid import convert

logger = logging.getLogger(__name__)

LATITUDE_FIELD = "latitude"
LONGITUDE_FIELD = "longitude"
FALLBACK_PREFIX = "mgrs_"

Row = Dict[str, str]


class PipelineError(Exception):
    """Raised when a run cannot continue (strict mode, missing column)."""


@dataclass
class PipelineStats:
    column: Optional[str] = None
    rows: int = 0
    converted: int = 0
    blank: int = 0
    failed: int = 0


def output_fields(header: Sequence[str]) -> Tuple[str, str]:
    """Names for the appended columns.

    The plain names are prefixed (repeatedly if needed) until neither
    collides with an input column.
    """
    taken = set(header)
    lat, lon = LATITUDE_FIELD, LONGITUDE_FIELD
    while lat in taken or lon in taken:
        lat, lon = FALLBACK_PREFIX + lat, FALLBACK_PREFIX + lon
    return lat, lon


def output_header(header: Sequence[str]) -> List[str]:
    return list(header) + list(output_fields(header))


def format_degrees(value: float, decimals: Optional[int] = None) -> str:
    if decimals is None:
        return repr(float(value))
    return f"{value:.{decimals}f}"


def geocode_rows(
    header: Sequence[str],
    rows: Iterable[Mapping[str, str]],
    column: Optional[str] = None,
    sample_size: int = DEFAULT_SAMPLE_ROWS,
    strict: bool = False,
    require_column: bool = False,
    decimals: Optional[int] = None,
    stats: Optional[PipelineStats] = None,
) -> Iterator[Row]:
    """Return an iterator over ``rows`` with latitude/longitude appended.

    The MGRS column is detected up front on the first ``sample_size`` rows
    unless ``column`` is given, so column problems raise PipelineError before
    any row is produced. Rows whose value is blank or does not convert keep
    their data and get empty coordinates; ``strict`` turns a failed conversion
    into PipelineError instead.
    """
    stats = stats if stats is not None else PipelineStats()
    lat_field, lon_field = output_fields(header)
    it = iter(rows)
    sample = list(itertools.islice(it, sample_size))

    if column is not None:
        if column not in header:
            raise PipelineError(f"column {column!r} not found in header")
    else:
        column = detect(header, sample, max_rows=sample_size)
        if column is None:
            if require_column:
                raise PipelineError("no MGRS-like column detected")
            logger.warning("no MGRS-like column detected; coordinates left empty")
        else:
            logger.info("detected MGRS column", extra={"column": column})
    stats.column = column
    return _stream(itertools.chain(sample, it), column, lat_field, lon_field, strict, decimals, stats)


def _stream(
    rows: Iterable[Mapping[str, str]],
    column: Optional[str],
    lat_field: str,
    lon_field: str,
    strict: bool,
    decimals: Optional[int],
    stats: PipelineStats,
) -> Iterator[Row]:
    for lineno, row in enumerate(rows, start=1):
        out: Row = dict(row)
        out[lat_field] = ""
        out[lon_field] = ""
        stats.rows += 1
        value = (row.get(column) or "").strip() if column is not None else ""
        if not value:
            stats.blank += 1
            yield out
            continue

        result = convert(value)
        if result.ok:
            out[lat_field] = format_degrees(result.point.latitude, decimals)
            out[lon_field] = format_degrees(result.point.longitude, decimals)
            stats.converted += 1
        else:
            stats.failed += 1
            if strict:
                raise PipelineError(f"row {lineno}: {result.error}") from result.error
            logger.debug("conversion failed", extra={"row": lineno, "column": column})
        yield out


__all__ = [
    "LATITUDE_FIELD",
    "LONGITUDE_FIELD",
    "PipelineError",
    "PipelineStats",
    "Row",
    "output_fields",
    "output_header",
    "format_degrees",
    "geocode_rows",
]
