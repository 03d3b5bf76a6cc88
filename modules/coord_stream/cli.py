"""
Command line entry: read ``lng,lat`` records and print converted coordinates.

    $ echo "116.404,39.915" | bd09-to-wgs84
"""

import argparse
import logging
import sys
from contextlib import ExitStack

from core.config import settings
from modules.coord_transform import SUPPORTED_SYSTEMS
from .adapter import convert_stream

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bd09-to-wgs84",
        description="Convert coordinate records (one 'lng,lat' pair per line) between BD-09, GCJ-02 and WGS-84.",
    )
    parser.add_argument("-i", "--input", help="Input file (default: stdin)")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("--from", dest="from_sys", choices=SUPPORTED_SYSTEMS, default="bd09")
    parser.add_argument("--to", dest="to_sys", choices=SUPPORTED_SYSTEMS, default="wgs84")
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Do not apply the output calibration offset (+0.0001 lng, -0.0003 lat)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # 日志写到 stderr，stdout 只输出数据
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        stream=sys.stderr,
    )
    calibrate = settings.calibrate_output and not args.raw

    with ExitStack() as stack:
        try:
            src = stack.enter_context(open(args.input, "r", encoding="utf-8")) if args.input else sys.stdin
            dst = stack.enter_context(open(args.output, "w", encoding="utf-8")) if args.output else sys.stdout
        except OSError as exc:
            parser.error(f"cannot open {exc.filename}: {exc.strerror}")
        count = convert_stream(src, dst, args.from_sys, args.to_sys, calibrate)
        dst.flush()

    logger.debug("Wrote %d record(s)", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
