"""
Price Dashboard - Main FastAPI Application

Chart geometry and quote formatting service for the share price dashboard.
"""

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from . import __version__
from .api import chart, quote
from .config import get_settings
from .models import APIResponse

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Price Dashboard...")
    logger.info(
        f"Chart canvas {settings.chart_width:g}x{settings.chart_height:g}, "
        f"time zone {settings.display_timezone}"
    )

    yield

    logger.info("Shutting down Price Dashboard...")


# Create FastAPI application
app = FastAPI(
    title="Price Dashboard",
    description="Price chart geometry and quote formatting service",
    version=__version__,
    lifespan=lifespan
)

# Add CORS middleware for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8000", "http://127.0.0.1:8000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===========================================
# Include API Routers
# ===========================================

app.include_router(chart.router, prefix="/api/chart", tags=["Chart"])
app.include_router(quote.router, prefix="/api/quote", tags=["Quote"])


# ===========================================
# Error Handlers
# ===========================================

@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    """Handle 404 errors."""
    return JSONResponse(
        status_code=404,
        content=APIResponse(success=False, message="Resource not found").model_dump(exclude_none=True)
    )


@app.exception_handler(500)
async def server_error_handler(request: Request, exc: Exception):
    """Handle 500 errors."""
    logger.error(f"Server error: {exc}")
    return JSONResponse(
        status_code=500,
        content=APIResponse(success=False, message="Internal server error").model_dump(exclude_none=True)
    )


# ===========================================
# Health Check
# ===========================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
