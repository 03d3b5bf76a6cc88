from __future__ import annotations

import io
import logging
import re
from typing import Iterable, Iterator, TextIO

from modules.coord_transform import convert_coordinate

logger = logging.getLogger(__name__)

# 输出校准偏移（叠加在转换结果之后，不属于转换算法本身）
CALIBRATION_LNG_OFFSET = 0.0001
CALIBRATION_LAT_OFFSET = -0.0003

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_RECORD_RE = re.compile(rf"^\s*({_NUMBER})\s*([^\s\d.+\-])\s*({_NUMBER})\s*$")


def parse_record(line: str) -> tuple[float, float, str] | None:
    """
    Parse ``<lng><delimiter><lat>`` into ``(lng, lat, delimiter)``.
    Returns None when the line is not a record.
    """
    match = _RECORD_RE.match(line)
    if not match:
        return None
    try:
        return float(match.group(1)), float(match.group(3)), match.group(2)
    except ValueError:
        return None


def iter_records(lines: Iterable[str]) -> Iterator[tuple[float, float, str]]:
    for line_no, raw_line in enumerate(lines, start=1):
        if not raw_line.strip():
            continue
        record = parse_record(raw_line)
        if record is None:
            logger.warning("Stopping at unparsable record on line %d: %r", line_no, raw_line.rstrip("\r\n"))
            return
        yield record


def format_record(lng: float, lat: float, delimiter: str) -> str:
    return f"{lng:.8f}{delimiter} {lat:.8f}"


def convert_record(
    lng: float,
    lat: float,
    from_sys: str = "bd09",
    to_sys: str = "wgs84",
    calibrate: bool = True,
) -> tuple[float, float]:
    out_lng, out_lat = convert_coordinate(lng, lat, from_sys, to_sys)
    if calibrate:
        out_lng += CALIBRATION_LNG_OFFSET
        out_lat += CALIBRATION_LAT_OFFSET
    return out_lng, out_lat


def convert_stream(
    src: TextIO,
    dst: TextIO,
    from_sys: str = "bd09",
    to_sys: str = "wgs84",
    calibrate: bool = True,
) -> int:
    """
    Read records from ``src``, convert each one and write a formatted line to ``dst``.

    Reading stops at end of input or at the first unparsable record.
    Returns the number of records written.
    """
    count = 0
    for lng, lat, delimiter in iter_records(src):
        out_lng, out_lat = convert_record(lng, lat, from_sys, to_sys, calibrate)
        dst.write(format_record(out_lng, out_lat, delimiter) + "\n")
        count += 1
    logger.info("Converted %d record(s) %s -> %s (calibrate=%s)", count, from_sys, to_sys, calibrate)
    return count


def convert_text(
    text: str,
    from_sys: str = "bd09",
    to_sys: str = "wgs84",
    calibrate: bool = True,
) -> str:
    buffer = io.StringIO()
    convert_stream(io.StringIO(text), buffer, from_sys, to_sys, calibrate)
    return buffer.getvalue()
