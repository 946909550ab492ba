"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import combine

api_router = APIRouter()

api_router.include_router(combine.router, prefix="/combine", tags=["Combine"])
