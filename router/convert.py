import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse

from core.config import settings
from modules.coord_stream import convert_text
from modules.coord_transform import bd09_to_gcj02, convert_coordinate, out_of_china
from modules.coord_transform.schemas import ConvertRequest, ConvertResponse, CoordSystem

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/v1", tags=["Coordinate Conversion"])


def _input_in_china(lng: float, lat: float, from_sys: str) -> bool:
    # BD09 先去掉百度偏移，再做包围盒判断
    if from_sys == "bd09":
        lng, lat = bd09_to_gcj02(lng, lat)
    return not out_of_china(lng, lat)


@router.post(
    "/convert",
    response_model=ConvertResponse,
    summary="Convert a single coordinate",
    description="Converts one point between BD-09, GCJ-02 and WGS-84. No calibration offset is applied.",
)
async def convert_point_endpoint(payload: ConvertRequest):
    lng, lat = convert_coordinate(payload.lng, payload.lat, payload.from_sys, payload.to_sys)
    logger.debug(
        f"Converted {payload.from_sys.upper()}({payload.lng},{payload.lat}) -> "
        f"{payload.to_sys.upper()}({lng},{lat})"
    )
    return ConvertResponse(
        lng=lng,
        lat=lat,
        from_sys=payload.from_sys,
        to_sys=payload.to_sys,
        in_china=_input_in_china(payload.lng, payload.lat, payload.from_sys),
    )


@router.post(
    "/convert/text",
    response_class=PlainTextResponse,
    summary="Convert a text stream of coordinates",
    description="Body: one 'lng,lat' record per line. Output matches the command line tool.",
)
async def convert_text_endpoint(
    request: Request,
    from_sys: CoordSystem = Query("bd09"),
    to_sys: CoordSystem = Query("wgs84"),
    calibrate: Optional[bool] = Query(None, description="Defaults to CALIBRATE_OUTPUT"),
):
    # 非 UTF-8 字节替换为 U+FFFD，该行解析失败后按流协议结束读取
    text = (await request.body()).decode("utf-8", errors="replace")
    use_calibration = settings.calibrate_output if calibrate is None else calibrate
    output = await asyncio.to_thread(convert_text, text, from_sys, to_sys, use_calibration)
    return PlainTextResponse(output)
