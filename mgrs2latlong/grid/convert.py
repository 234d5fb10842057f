from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConversionError, RangeError
from .projection import inverse_ups, inverse_utm
from .reference import MgrsReference, parse
from .squares import band_latitudes, square_origin

# Slack on the band check beyond one precision box (degrees, ~110 m)
BAND_TOLERANCE_DEG = 1e-3
# Generous metres-per-degree so the box slack never under-covers
_METRES_PER_DEGREE = 100_000.0


@dataclass(frozen=True)
class GridPosition:
    zone_number: Optional[int]
    hemisphere: str
    easting: int
    northing: int


@dataclass(frozen=True)
class GeodeticPoint:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise RangeError(f"latitude {self.latitude} outside [-90, 90]")
        if not -180.0 < self.longitude <= 180.0:
            raise RangeError(f"longitude {self.longitude} outside (-180, 180]")


@dataclass(frozen=True)
class Conversion:
    """Outcome of converting one string: exactly one of ``point``/``error`` is set."""

    text: str
    point: Optional[GeodeticPoint] = None
    error: Optional[ConversionError] = None
    reference: Optional[MgrsReference] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve(reference: MgrsReference) -> GridPosition:
    """Full grid easting/northing of the south-west corner of the reference's box."""
    east0, north0 = square_origin(reference.zone_number, reference.latitude_band, reference.square_id)
    scale = reference.precision_m
    easting = east0 + int(reference.easting or 0) * scale
    northing = north0 + int(reference.northing or 0) * scale
    return GridPosition(reference.zone_number, reference.hemisphere, easting, northing)


def to_geodetic(reference: MgrsReference) -> GeodeticPoint:
    """Convert a parsed reference to WGS84 degrees; RangeError if it does not fall in its band."""
    pos = resolve(reference)
    if reference.is_polar:
        lat, lon = inverse_ups(pos.hemisphere, pos.easting, pos.northing)
    else:
        lat, lon = inverse_utm(pos.zone_number, pos.hemisphere, pos.easting, pos.northing)

    south, north = band_latitudes(reference.latitude_band)
    slack = BAND_TOLERANCE_DEG + reference.precision_m / _METRES_PER_DEGREE
    if not south - slack <= lat <= north + slack:
        raise RangeError(
            f"position {lat:.4f} lies outside latitude band {reference.latitude_band} ({south:g}..{north:g})",
            str(reference),
        )
    lat = min(90.0, max(-90.0, lat))
    return GeodeticPoint(latitude=lat, longitude=lon)


def convert(text: str) -> Conversion:
    """Parse and convert ``text``. Never raises for bad input; inspect ``.ok``."""
    try:
        reference = parse(text)
    except ConversionError as e:
        return Conversion(text=text, error=e)
    try:
        point = to_geodetic(reference)
    except ConversionError as e:
        return Conversion(text=text, error=e, reference=reference)
    return Conversion(text=text, point=point, reference=reference)


__all__ = ["GridPosition", "GeodeticPoint", "Conversion", "resolve", "to_geodetic", "convert"]
