from __future__ import annotations

from typing import Dict, Optional, Tuple

from .errors import RangeError

# Static lettering tables for the WGS84 ("AA") 100 km square scheme.

ONE_HUNDRED_KM = 100_000
TWO_THOUSAND_KM = 2_000_000

ZONED_BANDS = "CDEFGHJKLMNPQRSTUVWX"
POLAR_BANDS = "ABYZ"
SOUTHERN_BANDS = "ABCDEFGHJKLM"

# Column letters repeat every three zones; keyed by zone number mod 3
COLUMN_SETS: Dict[int, str] = {
    1: "ABCDEFGH",
    2: "JKLMNPQR",
    0: "STUVWXYZ",
}

ROW_LETTERS = "ABCDEFGHJKLMNPQRSTUV"

# Row lettering starts at 'A' on odd zones and at 'F' on even zones; keyed by zone mod 2
ROW_OFFSETS: Dict[int, int] = {
    1: 0,
    0: 5,
}

# Lowest grid northing any point of the band can have, used to pick the 2,000 km cycle
BAND_MIN_NORTHING: Dict[str, int] = {
    "C": 1_100_000,
    "D": 2_000_000,
    "E": 2_800_000,
    "F": 3_700_000,
    "G": 4_600_000,
    "H": 5_500_000,
    "J": 6_400_000,
    "K": 7_300_000,
    "L": 8_200_000,
    "M": 9_100_000,
    "N": 0,
    "P": 800_000,
    "Q": 1_700_000,
    "R": 2_600_000,
    "S": 3_500_000,
    "T": 4_400_000,
    "U": 5_300_000,
    "V": 6_200_000,
    "W": 7_000_000,
    "X": 7_900_000,
}

# UPS: band -> (column letters, false easting of the first column)
UPS_COLUMNS: Dict[str, Tuple[str, int]] = {
    "A": ("JKLPQRSTUXYZ", 800_000),
    "B": ("ABCFGHJKLPQR", 2_000_000),
    "Y": ("JKLPQRSTUXYZ", 800_000),
    "Z": ("ABCFGHJ", 2_000_000),
}

# UPS: band -> (row letters, false northing of the first row)
UPS_ROWS: Dict[str, Tuple[str, int]] = {
    "A": ("ABCDEFGHJKLMNPQRSTUVWXYZ", 800_000),
    "B": ("ABCDEFGHJKLMNPQRSTUVWXYZ", 800_000),
    "Y": ("ABCDEFGHJKLMNP", 1_300_000),
    "Z": ("ABCDEFGHJKLMNP", 1_300_000),
}


def band_latitudes(band: str) -> Tuple[float, float]:
    """Return the (south, north) latitude limits of a band in degrees."""
    if band in ("A", "B"):
        return -90.0, -80.0
    if band in ("Y", "Z"):
        return 84.0, 90.0
    idx = ZONED_BANDS.index(band)
    south = -80.0 + 8.0 * idx
    north = 84.0 if band == "X" else south + 8.0
    return south, north


def hemisphere(band: str) -> str:
    return "S" if band in SOUTHERN_BANDS else "N"


def column_letters(zone: int) -> str:
    return COLUMN_SETS[zone % 3]


def square_problem(zone: Optional[int], band: str, square: str) -> Optional[str]:
    """Explain why ``square`` cannot appear in the given grid zone, or None if it can."""
    col, row = square[0], square[1]
    if "I" in square or "O" in square:
        return "square letters I and O are not used"
    if zone is None:
        cols, _ = UPS_COLUMNS[band]
        rows, _ = UPS_ROWS[band]
        if col not in cols:
            return f"column letter {col} is not used in polar band {band}"
        if row not in rows:
            return f"row letter {row} is not used in polar band {band}"
        return None
    if col not in column_letters(zone):
        return f"column letter {col} is not used in zone {zone}"
    if row not in ROW_LETTERS:
        return f"row letter {row} is past V"
    return None


def square_origin(zone: Optional[int], band: str, square: str) -> Tuple[int, int]:
    """Grid easting/northing in metres of the south-west corner of a 100 km square."""
    reason = square_problem(zone, band, square)
    if reason:
        raise RangeError(reason, f"{zone or ''}{band}{square}")
    col, row = square[0], square[1]

    if zone is None:
        cols, false_easting = UPS_COLUMNS[band]
        rows, false_northing = UPS_ROWS[band]
        return (
            false_easting + cols.index(col) * ONE_HUNDRED_KM,
            false_northing + rows.index(row) * ONE_HUNDRED_KM,
        )

    easting = (column_letters(zone).index(col) + 1) * ONE_HUNDRED_KM
    row_idx = (ROW_LETTERS.index(row) - ROW_OFFSETS[zone % 2]) % len(ROW_LETTERS)
    northing = row_idx * ONE_HUNDRED_KM
    while northing < BAND_MIN_NORTHING[band]:
        northing += TWO_THOUSAND_KM
    return easting, northing


__all__ = [
    "ZONED_BANDS",
    "POLAR_BANDS",
    "COLUMN_SETS",
    "ROW_LETTERS",
    "ROW_OFFSETS",
    "BAND_MIN_NORTHING",
    "UPS_COLUMNS",
    "UPS_ROWS",
    "band_latitudes",
    "hemisphere",
    "column_letters",
    "square_problem",
    "square_origin",
]
