"""
BD-09 / GCJ-02 / WGS-84 坐标互转。

所有函数均为纯函数：无全局可变状态、无缓存，可在多线程中直接并发调用。
"""

import logging
import math
from typing import Callable, Dict, Tuple

from core.exceptions import UnsupportedCoordSystemError
from .schemas import Coordinate

logger = logging.getLogger(__name__)

# Krasovsky 1940 椭球参数（GCJ-02 算法沿用）
A = 6378245.0
EE = 0.00669342162296594323

# 中国范围包围盒
CHINA_MIN_LNG = 72.004
CHINA_MAX_LNG = 137.8347
CHINA_MIN_LAT = 0.8293
CHINA_MAX_LAT = 55.8271

# BD-09 编码原点偏移
BD_LNG_OFFSET = 0.0065
BD_LAT_OFFSET = 0.006

# GCJ-02 反解（二分法）参数
INVERSE_THRESHOLD = 1e-7  # 约 1.1 cm
INVERSE_MAX_ITER = 30
INVERSE_SEARCH_RADIUS = 0.5


def out_of_china(lng, lat):
    """
    判断坐标点是否在中国范围外（范围外不做偏移）
    """
    return (
        lng < CHINA_MIN_LNG
        or lng > CHINA_MAX_LNG
        or lat < CHINA_MIN_LAT
        or lat > CHINA_MAX_LAT
    )


def transform_lat(lng, lat):
    """
    计算纬度偏移量的辅助函数
    """
    ret = -100.0 + 2.0 * lng + 3.0 * lat + 0.2 * lat * lat + 0.1 * lng * lat + 0.2 * math.sqrt(abs(lng))
    ret += (20.0 * math.sin(6.0 * lng * math.pi) + 20.0 * math.sin(2.0 * lng * math.pi)) * 2.0 / 3.0
    ret += (20.0 * math.sin(lat * math.pi) + 40.0 * math.sin(lat / 3.0 * math.pi)) * 2.0 / 3.0
    ret += (160.0 * math.sin(lat / 12.0 * math.pi) + 320.0 * math.sin(lat * math.pi / 30.0)) * 2.0 / 3.0
    return ret


def transform_lng(lng, lat):
    """
    计算经度偏移量的辅助函数
    """
    ret = 300.0 + lng + 2.0 * lat + 0.1 * lng * lng + 0.1 * lng * lat + 0.1 * math.sqrt(abs(lng))
    ret += (20.0 * math.sin(6.0 * lng * math.pi) + 20.0 * math.sin(2.0 * lng * math.pi)) * 2.0 / 3.0
    ret += (20.0 * math.sin(lng * math.pi) + 40.0 * math.sin(lng / 3.0 * math.pi)) * 2.0 / 3.0
    ret += (150.0 * math.sin(lng / 12.0 * math.pi) + 300.0 * math.sin(lng / 30.0 * math.pi)) * 2.0 / 3.0
    return ret


def wgs84_to_gcj02(lng, lat) -> Coordinate:
    """
    将WGS84坐标系转换为GCJ-02坐标系（火星坐标系）
    :param lng: WGS84坐标系的经度
    :param lat: WGS84坐标系的纬度
    :return: 转换后的GCJ-02坐标系的经纬度
    """
    if out_of_china(lng, lat):
        # 若坐标点不在中国范围内，直接返回原坐标
        return Coordinate(lng, lat)

    # 以 (105E, 35N) 为展开点计算偏移量
    dlat = transform_lat(lng - 105.0, lat - 35.0)
    dlng = transform_lng(lng - 105.0, lat - 35.0)

    # 将纬度转换为弧度
    radlat = lat / 180.0 * math.pi
    magic = math.sin(radlat)
    magic = 1 - EE * magic * magic
    sqrtmagic = math.sqrt(magic)

    # 偏移量换算为度
    dlat = (dlat * 180.0) / ((A * (1 - EE)) / (magic * sqrtmagic) * math.pi)
    dlng = (dlng * 180.0) / (A / sqrtmagic * math.cos(radlat) * math.pi)

    return Coordinate(lng + dlng, lat + dlat)


def _bisect_wgs84(lng, lat) -> Tuple[Coordinate, int, bool]:
    """
    二分法反解 GCJ-02 -> WGS84，经纬度两个轴各自独立收缩区间。

    :return: (结果坐标, 实际迭代次数, 是否达到收敛阈值)
    """
    min_lat, max_lat = lat - INVERSE_SEARCH_RADIUS, lat + INVERSE_SEARCH_RADIUS
    min_lng, max_lng = lng - INVERSE_SEARCH_RADIUS, lng + INVERSE_SEARCH_RADIUS
    mid_lng, mid_lat = 0.0, 0.0

    for i in range(INVERSE_MAX_ITER):
        mid_lat = (min_lat + max_lat) / 2.0
        mid_lng = (min_lng + max_lng) / 2.0
        calc_lng, calc_lat = wgs84_to_gcj02(mid_lng, mid_lat)
        d_lng = calc_lng - lng
        d_lat = calc_lat - lat
        if abs(d_lat) < INVERSE_THRESHOLD and abs(d_lng) < INVERSE_THRESHOLD:
            return Coordinate(mid_lng, mid_lat), i + 1, True

        if d_lat > 0:
            max_lat = mid_lat
        else:
            min_lat = mid_lat
        if d_lng > 0:
            max_lng = mid_lng
        else:
            min_lng = mid_lng

    return Coordinate(mid_lng, mid_lat), INVERSE_MAX_ITER, False


def gcj02_to_wgs84(lng, lat) -> Coordinate:
    """
    将GCJ-02坐标系反推为WGS84坐标系（二分法）。

    最多迭代 30 次；未收敛时返回最后一次的中点，不抛出异常。

    :param lng: GCJ-02 坐标系的经度
    :param lat: GCJ-02 坐标系的纬度
    :return: 反推后的 WGS84 坐标系经纬度 (lng, lat)
    """
    if out_of_china(lng, lat):
        return Coordinate(lng, lat)

    result, iterations, converged = _bisect_wgs84(lng, lat)
    if not converged:
        logger.debug(
            "GCJ02->WGS84 未在 %d 次迭代内收敛: (%s, %s) -> (%s, %s)",
            iterations, lng, lat, result.lng, result.lat,
        )
    return result


def bd09_to_gcj02(lng, lat) -> Coordinate:
    """
    百度坐标系(BD-09)转火星坐标系(GCJ-02)
    """
    x = lng - BD_LNG_OFFSET
    y = lat - BD_LAT_OFFSET
    z = math.sqrt(x * x + y * y) - 0.00002 * math.sin(y * math.pi)
    theta = math.atan2(y, x) - 0.000003 * math.cos(x * math.pi)
    return Coordinate(z * math.cos(theta), z * math.sin(theta))


def gcj02_to_bd09(lng, lat) -> Coordinate:
    """
    火星坐标系(GCJ-02)转百度坐标系(BD-09)
    """
    x = lng
    y = lat
    z = math.sqrt(x * x + y * y) + 0.00002 * math.sin(y * math.pi)
    theta = math.atan2(y, x) + 0.000003 * math.cos(x * math.pi)
    return Coordinate(z * math.cos(theta) + BD_LNG_OFFSET, z * math.sin(theta) + BD_LAT_OFFSET)


def bd09_to_wgs84(lng, lat) -> Coordinate:
    """
    百度坐标系(BD-09)转WGS84
    """
    return gcj02_to_wgs84(*bd09_to_gcj02(lng, lat))


def wgs84_to_bd09(lng, lat) -> Coordinate:
    """
    WGS84转百度坐标系(BD-09)
    """
    return gcj02_to_bd09(*wgs84_to_gcj02(lng, lat))


_CONVERTERS: Dict[Tuple[str, str], Callable[[float, float], Coordinate]] = {
    ("wgs84", "gcj02"): wgs84_to_gcj02,
    ("gcj02", "wgs84"): gcj02_to_wgs84,
    ("gcj02", "bd09"): gcj02_to_bd09,
    ("bd09", "gcj02"): bd09_to_gcj02,
    ("wgs84", "bd09"): wgs84_to_bd09,
    ("bd09", "wgs84"): bd09_to_wgs84,
}

SUPPORTED_SYSTEMS = ("bd09", "gcj02", "wgs84")


def _normalize_system(coord_system: str) -> str:
    name = str(coord_system or "").strip().lower()
    if name not in SUPPORTED_SYSTEMS:
        raise UnsupportedCoordSystemError(coord_system)
    return name


def convert_coordinate(lng, lat, from_sys: str, to_sys: str) -> Coordinate:
    """坐标系统转换
    支持的坐标系统：
    - WGS84: 世界大地测量系统
    - GCJ02: 国测局坐标系
    - BD09: 百度坐标系
    """
    source = _normalize_system(from_sys)
    target = _normalize_system(to_sys)
    if source == target:
        return Coordinate(lng, lat)
    return _CONVERTERS[(source, target)](lng, lat)
