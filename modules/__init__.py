"""Convenience exports for conversion helpers."""

from .coord_stream import convert_stream, convert_text
from .coord_transform import (
    Coordinate,
    bd09_to_gcj02,
    bd09_to_wgs84,
    convert_coordinate,
    gcj02_to_bd09,
    gcj02_to_wgs84,
    out_of_china,
    wgs84_to_bd09,
    wgs84_to_gcj02,
)

__all__ = [
    "Coordinate",
    "bd09_to_gcj02",
    "bd09_to_wgs84",
    "convert_coordinate",
    "convert_stream",
    "convert_text",
    "gcj02_to_bd09",
    "gcj02_to_wgs84",
    "out_of_china",
    "wgs84_to_bd09",
    "wgs84_to_gcj02",
]
