from .core import (
    SUPPORTED_SYSTEMS,
    bd09_to_gcj02,
    bd09_to_wgs84,
    convert_coordinate,
    gcj02_to_bd09,
    gcj02_to_wgs84,
    out_of_china,
    wgs84_to_bd09,
    wgs84_to_gcj02,
)
from .schemas import Coordinate

__all__ = [
    "Coordinate",
    "SUPPORTED_SYSTEMS",
    "bd09_to_gcj02",
    "bd09_to_wgs84",
    "convert_coordinate",
    "gcj02_to_bd09",
    "gcj02_to_wgs84",
    "out_of_china",
    "wgs84_to_bd09",
    "wgs84_to_gcj02",
]
