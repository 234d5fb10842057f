"""WGS84 inverse projections used by MGRS.

Inverse Transverse Mercator uses the Krüger n-series (third order), which is
good to well under a millimetre across a UTM zone. Inverse polar stereographic
uses the conformal-latitude series from Snyder, *Map Projections: A Working
Manual* (eq. 3-5 and 21-33).
"""
from __future__ import annotations

import math
from typing import Tuple

# WGS84
SEMI_MAJOR_AXIS = 6378137.0
FLATTENING = 1 / 298.257223563

UTM_SCALE_FACTOR = 0.9996
UTM_FALSE_EASTING = 500_000.0
UTM_FALSE_NORTHING_SOUTH = 10_000_000.0

UPS_SCALE_FACTOR = 0.994
UPS_FALSE_EASTING = 2_000_000.0
UPS_FALSE_NORTHING = 2_000_000.0

_E2 = FLATTENING * (2 - FLATTENING)
_E = math.sqrt(_E2)
_N = FLATTENING / (2 - FLATTENING)

# Rectifying radius
_A_HAT = SEMI_MAJOR_AXIS / (1 + _N) * (1 + _N ** 2 / 4 + _N ** 4 / 64)

_BETA = (
    _N / 2 - 2 * _N ** 2 / 3 + 37 * _N ** 3 / 96,
    _N ** 2 / 48 + _N ** 3 / 15,
    17 * _N ** 3 / 480,
)
_DELTA = (
    2 * _N - 2 * _N ** 2 / 3 - 2 * _N ** 3,
    7 * _N ** 2 / 3 - 8 * _N ** 3 / 5,
    56 * _N ** 3 / 15,
)

# Conformal latitude -> geodetic latitude
_CHI = (
    _E2 / 2 + 5 * _E2 ** 2 / 24 + _E2 ** 3 / 12 + 13 * _E2 ** 4 / 360,
    7 * _E2 ** 2 / 48 + 29 * _E2 ** 3 / 240 + 811 * _E2 ** 4 / 11520,
    7 * _E2 ** 3 / 120 + 81 * _E2 ** 4 / 1120,
    4279 * _E2 ** 4 / 161280,
)
_UPS_T_SCALE = math.sqrt((1 + _E) ** (1 + _E) * (1 - _E) ** (1 - _E)) / (
    2 * SEMI_MAJOR_AXIS * UPS_SCALE_FACTOR
)


def central_meridian(zone: int) -> float:
    return 6.0 * zone - 183.0


def normalize_longitude(lon: float) -> float:
    """Wrap degrees into (-180, 180]."""
    lon = math.fmod(lon + 180.0, 360.0)
    if lon <= 0.0:
        lon += 360.0
    return lon - 180.0


def inverse_utm(zone: int, hemisphere: str, easting: float, northing: float) -> Tuple[float, float]:
    """UTM grid coordinates in metres -> (latitude, longitude) in degrees."""
    if hemisphere == "S":
        northing -= UTM_FALSE_NORTHING_SOUTH
    xi = northing / (UTM_SCALE_FACTOR * _A_HAT)
    eta = (easting - UTM_FALSE_EASTING) / (UTM_SCALE_FACTOR * _A_HAT)

    xi_p, eta_p = xi, eta
    for j, b in enumerate(_BETA, start=1):
        xi_p -= b * math.sin(2 * j * xi) * math.cosh(2 * j * eta)
        eta_p -= b * math.cos(2 * j * xi) * math.sinh(2 * j * eta)

    chi = math.asin(math.sin(xi_p) / math.cosh(eta_p))
    lat = chi
    for j, d in enumerate(_DELTA, start=1):
        lat += d * math.sin(2 * j * chi)
    dlon = math.atan2(math.sinh(eta_p), math.cos(xi_p))

    return math.degrees(lat), normalize_longitude(central_meridian(zone) + math.degrees(dlon))


def inverse_ups(hemisphere: str, easting: float, northing: float) -> Tuple[float, float]:
    """UPS grid coordinates in metres -> (latitude, longitude) in degrees."""
    dx = easting - UPS_FALSE_EASTING
    dy = northing - UPS_FALSE_NORTHING
    rho = math.hypot(dx, dy)
    if rho == 0.0:
        return (90.0 if hemisphere == "N" else -90.0), 0.0

    chi = math.pi / 2 - 2 * math.atan(rho * _UPS_T_SCALE)
    lat = chi
    for j, c in enumerate(_CHI, start=1):
        lat += c * math.sin(2 * j * chi)

    if hemisphere == "N":
        return math.degrees(lat), normalize_longitude(math.degrees(math.atan2(dx, -dy)))
    return -math.degrees(lat), normalize_longitude(math.degrees(math.atan2(dx, dy)))


__all__ = [
    "SEMI_MAJOR_AXIS",
    "FLATTENING",
    "central_meridian",
    "normalize_longitude",
    "inverse_utm",
    "inverse_ups",
]
