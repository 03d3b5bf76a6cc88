from typing import Any, Dict, Optional

class BizError(Exception):
    """
    通用业务异常
    """
    def __init__(
        self, 
        message: str, 
        code: int = 400, 
        payload: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.payload = payload or {}
        super().__init__(self.message)

class UnsupportedCoordSystemError(BizError):
    """
    不支持的坐标系名称 (仅支持 bd09 / gcj02 / wgs84)
    """
    def __init__(self, coord_system: str):
        super().__init__(
            message=f"不支持的坐标系: {coord_system}",
            code=400,
            payload={"coord_system": str(coord_system), "supported": ["bd09", "gcj02", "wgs84"]}
        )
