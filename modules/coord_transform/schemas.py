from typing import Literal, NamedTuple

from pydantic import BaseModel, Field

CoordSystem = Literal["bd09", "gcj02", "wgs84"]


class Coordinate(NamedTuple):
    """
    (longitude, latitude) in decimal degrees.
    Unpacks like a plain tuple: ``lng, lat = wgs84_to_gcj02(...)``.
    """
    lng: float
    lat: float


class ConvertRequest(BaseModel):
    """
    Single point conversion request.
    """
    lng: float = Field(..., description="Longitude (from_sys)", ge=-180, le=180)
    lat: float = Field(..., description="Latitude (from_sys)", ge=-90, le=90)
    from_sys: CoordSystem = Field("bd09", description="Input Coordinate System")
    to_sys: CoordSystem = Field("wgs84", description="Output Coordinate System")


class ConvertResponse(BaseModel):
    lng: float = Field(..., description="Longitude (to_sys)")
    lat: float = Field(..., description="Latitude (to_sys)")
    from_sys: CoordSystem
    to_sys: CoordSystem
    in_china: bool = Field(..., description="Whether the input point falls inside the obfuscation region")
