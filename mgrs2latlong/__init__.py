"""Find MGRS grid references in CSV data and add WGS84 latitude/longitude."""

from .detect import detect
from .grid import convert

__version__ = "0.1.0"

__all__ = ["detect", "convert", "__version__"]
