from fastapi import APIRouter

from app.api.v1.repositories import router as repositories_router
from app.api.v1.settings import router as settings_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(settings_router)
api_router.include_router(repositories_router)
