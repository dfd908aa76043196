"""
Routes Package
Aggregate all route routers
"""
from fastapi import APIRouter

from .health import router as health_router
from .test_cases import router as test_cases_router

# Create main router
api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(test_cases_router)
