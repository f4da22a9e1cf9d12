"""
Livestock Module - Router aggregation
"""
from fastapi import APIRouter

from .sheep import router as sheep_router

router = APIRouter(prefix="/livestock", tags=["livestock"])

router.include_router(sheep_router)
