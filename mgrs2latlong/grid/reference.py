from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Optional

from .errors import FormatError
from .squares import POLAR_BANDS, ZONED_BANDS, hemisphere, square_problem

MAX_DIGITS_PER_AXIS = 5

# Zone digits, band, square, then one or two digit runs; whitespace only between parts
_GRAMMAR_RE = re.compile(
    r"^(?P<zone>\d*)\s*(?P<band>[A-Z])\s*(?P<square>[A-Z]{2})\s*(?P<east>\d*)(?:\s+(?P<north>\d+))?$"
)
_BAD_CHAR_RE = re.compile(r"[^A-Z0-9\s]")


@dataclass(frozen=True)
class MgrsReference:
    zone_number: Optional[int]  # None for UPS (polar) references
    latitude_band: str
    square_id: str
    easting: str = ""
    northing: str = ""

    def __post_init__(self) -> None:
        text = str(self)
        if len(self.latitude_band) != 1:
            raise FormatError("latitude band must be a single letter", text)
        if self.zone_number is None:
            if self.latitude_band not in POLAR_BANDS:
                raise FormatError(f"band {self.latitude_band!r} needs a zone number", text)
        else:
            if not 1 <= self.zone_number <= 60:
                raise FormatError("zone number must be between 1 and 60", text)
            if self.latitude_band not in ZONED_BANDS:
                raise FormatError(f"{self.latitude_band!r} is not a latitude band letter", text)
        if len(self.square_id) != 2 or not self.square_id.isalpha():
            raise FormatError("square identifier must be two letters", text)
        reason = square_problem(self.zone_number, self.latitude_band, self.square_id)
        if reason:
            raise FormatError(reason, text)
        if len(self.easting) != len(self.northing):
            raise FormatError("easting and northing must have the same number of digits", text)
        if len(self.easting) > MAX_DIGITS_PER_AXIS:
            raise FormatError("at most five digits per axis are allowed", text)
        if any(c not in string.digits for c in self.easting + self.northing):
            raise FormatError("easting and northing must be digits", text)

    @property
    def digits(self) -> int:
        return len(self.easting)

    @property
    def precision_m(self) -> int:
        return 10 ** (MAX_DIGITS_PER_AXIS - self.digits)

    @property
    def hemisphere(self) -> str:
        return hemisphere(self.latitude_band)

    @property
    def is_polar(self) -> bool:
        return self.zone_number is None

    @property
    def grid_zone(self) -> str:
        return f"{self.zone_number or ''}{self.latitude_band}"

    def __str__(self) -> str:
        return f"{self.grid_zone}{self.square_id}{self.easting}{self.northing}"


def parse(text: str) -> MgrsReference:
    """Parse an MGRS reference such as ``33TWM1234567890`` or ``33T WM 12345 67890``.

    Letters are case-insensitive and whitespace may separate the grid zone,
    the square and the two numeric halves. Raises FormatError on anything else.
    """
    if not isinstance(text, str):
        raise FormatError("MGRS reference must be a string")
    s = text.strip().upper()
    if not s:
        raise FormatError("empty MGRS reference")
    bad = _BAD_CHAR_RE.search(s)
    if bad:
        raise FormatError(f"invalid character {bad.group(0)!r}", text)

    m = _GRAMMAR_RE.match(s)
    if not m:
        raise FormatError("expected <zone><band><square><digits>, e.g. 33TWM1234567890", text)

    zone_digits = m.group("zone")
    if len(zone_digits) > 2:
        raise FormatError("zone number has more than two digits", text)
    zone = int(zone_digits) if zone_digits else None
    if zone is not None and not 1 <= zone <= 60:
        raise FormatError("zone number must be between 1 and 60", text)

    band = m.group("band")
    if band in ("I", "O"):
        raise FormatError(f"band letter {band} is not used", text)

    east, north = m.group("east"), m.group("north")
    if north is not None:
        if len(east) != len(north):
            raise FormatError("easting and northing must have the same number of digits", text)
    else:
        if len(east) % 2:
            raise FormatError("odd number of digits", text)
        half = len(east) // 2
        east, north = east[:half], east[half:]
    if len(east) > MAX_DIGITS_PER_AXIS:
        raise FormatError("at most ten digits are allowed", text)

    return MgrsReference(
        zone_number=zone,
        latitude_band=band,
        square_id=m.group("square"),
        easting=east,
        northing=north,
    )


__all__ = ["MgrsReference", "parse", "MAX_DIGITS_PER_AXIS"]
