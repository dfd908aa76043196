"""
Health Routes
Health check and environment status endpoints
"""
from fastapi import APIRouter
from datetime import datetime

from ..dependencies import get_config
from ..models.test_cases import EnvStatusResponse

router = APIRouter()


@router.get("/", tags=["Health"])
async def root():
    """Basic health check endpoint"""
    return {
        "message": "Linear Test Case Generator API",
        "status": "healthy",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc"
    }


@router.get("/health", tags=["Health"])
async def health_check():
    """Liveness check with credential configuration summary"""
    config = get_config()
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "openai": "configured" if config.has_openai_key else "requires request key",
            "linear": "configured" if config.has_linear_key else "requires request key"
        }
    }


@router.get("/api/env-status",
         tags=["Configuration"],
         response_model=EnvStatusResponse,
         summary="Report configured default credentials",
         description="Whether OPENAI_API_KEY and LINEAR_API_KEY are set in the server environment. Key values are never returned.")
async def env_status():
    config = get_config()
    return EnvStatusResponse(hasOpenAI=config.has_openai_key, hasLinear=config.has_linear_key)
