"""MGRS parsing and conversion to WGS84 latitude/longitude.

Modules:
 - errors: FormatError / RangeError taxonomy
 - reference: MgrsReference value type and the string parser
 - squares: 100 km square lettering tables (UTM and UPS)
 - projection: inverse Transverse Mercator and polar stereographic
 - convert: GeodeticPoint and the total ``convert`` function
"""

from .convert import Conversion, GeodeticPoint, GridPosition, convert, resolve, to_geodetic
from .errors import ConversionError, FormatError, RangeError
from .reference import MgrsReference, parse

__all__ = [
    "Conversion",
    "ConversionError",
    "FormatError",
    "GeodeticPoint",
    "GridPosition",
    "MgrsReference",
    "RangeError",
    "convert",
    "parse",
    "resolve",
    "to_geodetic",
]
