from .convert import router as convert_router
from .misc import router as misc_router

__all__ = ["convert_router", "misc_router"]
