from fastapi import APIRouter

from . import xml

router = APIRouter()
router.include_router(xml.router, prefix="/api/xml", tags=["xml"])

__all__ = ["router"]
