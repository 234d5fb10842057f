from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from .grid import ConversionError, parse

DEFAULT_SAMPLE_ROWS = 100

# -----------------------------
# Lexical shape of an MGRS value
# -----------------------------

# Zoned (33TWM...) or polar (ZAH...) grid zone, square, then 2-10 digits
MGRS_SHAPE_RE = re.compile(
    r"(?:\d{1,2}\s*[C-HJ-NP-X]|[ABYZ])\s*[A-HJ-NP-Z]{2}\s*(?P<east>\d+)(?:\s+(?P<north>\d+))?",
    re.IGNORECASE | re.ASCII,
)
MIN_DIGITS = 2
MAX_DIGITS = 10


@dataclass
class ColumnCandidate:
    name: str
    position: int
    sampled: int = 0
    lexical_matches: int = 0
    parsed_matches: int = 0


def looks_like_mgrs(value: Any) -> bool:
    """Superficial shape test; does not validate letters against the zone."""
    if value is None:
        return False
    m = MGRS_SHAPE_RE.fullmatch(str(value).strip())
    if not m:
        return False
    east, north = m.group("east"), m.group("north")
    if north is not None and len(east) != len(north):
        return False
    digits = len(east) + len(north or "")
    return digits % 2 == 0 and MIN_DIGITS <= digits <= MAX_DIGITS


def _parses(value: Any) -> bool:
    try:
        parse(str(value))
    except ConversionError:
        return False
    return True


def score_columns(
    header: Sequence[str],
    sample_rows: Sequence[Mapping[str, Any]],
    max_rows: int = DEFAULT_SAMPLE_ROWS,
) -> List[ColumnCandidate]:
    cands = [ColumnCandidate(name=name, position=i) for i, name in enumerate(header)]
    for row in list(sample_rows)[:max_rows]:
        for c in cands:
            value = row.get(c.name)
            if value is None or not str(value).strip():
                continue
            c.sampled += 1
            if looks_like_mgrs(value):
                c.lexical_matches += 1
                if _parses(value):
                    c.parsed_matches += 1
    return cands


def pick_column(cands: Sequence[ColumnCandidate]) -> Optional[ColumnCandidate]:
    best: Optional[ColumnCandidate] = None
    for c in cands:
        # strict '>' keeps the leftmost column on ties
        if c.lexical_matches > 0 and (best is None or c.lexical_matches > best.lexical_matches):
            best = c
    return best


def detect(
    header: Sequence[str],
    sample_rows: Sequence[Mapping[str, Any]],
    max_rows: int = DEFAULT_SAMPLE_ROWS,
) -> Optional[str]:
    """Name of the column that looks most like MGRS data, or None when nothing matches."""
    best = pick_column(score_columns(header, sample_rows, max_rows=max_rows))
    return best.name if best else None


__all__ = [
    "ColumnCandidate",
    "DEFAULT_SAMPLE_ROWS",
    "MGRS_SHAPE_RE",
    "looks_like_mgrs",
    "score_columns",
    "pick_column",
    "detect",
]
