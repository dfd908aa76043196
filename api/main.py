"""
Main FastAPI Application
FastAPI app creation, CORS configuration, middleware, and startup events
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import os
import time
import logging

from .dependencies import initialize_services
from .routes import api_router

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Linear Test Case Generator",
    description="Generate Japanese CSV test cases from Linear tickets or a free-text description using OpenAI.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173"
]
cors_origins.extend(
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()
)

# CORS configuration - use permissive mode in development
is_development = os.getenv("ENVIRONMENT", "development").lower() == "development"

if is_development:
    logger.info("CORS: Running in development mode - allowing all origins")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,  # Must be False when using allow_origins=["*"]
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
else:
    logger.info(f"CORS: Running in production mode - allowing {len(cors_origins)} origins")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log method, path, status and duration of every request"""
    start_time = time.time()
    response = await call_next(request)
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"({(time.time() - start_time) * 1000:.0f} ms)"
    )
    return response


app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    """Load configuration and build services on startup"""
    initialize_services()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
