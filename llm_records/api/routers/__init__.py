"""API routers"""

from fastapi import APIRouter

from .prompt import router as prompt_router
from .records import router as records_router
from .run import router as run_router
from .ui import router as ui_router

api_router = APIRouter(prefix="/api")

api_router.include_router(prompt_router)
api_router.include_router(records_router)
api_router.include_router(run_router)

__all__ = ["api_router", "ui_router"]
