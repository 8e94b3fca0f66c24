# sinkquote/routers/__init__.py
from fastapi import APIRouter

from .analytics_router import router as analytics_router
from .customers_router import router as customers_router
from .measurements_router import router as measurements_router
from .quotes_router import router as quotes_router
from .sinks_router import router as sinks_router

router = APIRouter()

router.include_router(customers_router)
router.include_router(measurements_router)
router.include_router(sinks_router)
router.include_router(analytics_router)
router.include_router(quotes_router)

__all__ = [
    "router",
    "analytics_router",
    "customers_router",
    "measurements_router",
    "quotes_router",
    "sinks_router",
]
