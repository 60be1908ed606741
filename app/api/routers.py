from fastapi import APIRouter

from app.api.v1.query import router as query_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(query_router)
