"""
FastAPI Application Entry Point
================================

Main application initialization and wiring.
Run with: uvicorn src.app.main:app --reload
"""

# Load environment variables FIRST, before any other imports
from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import router
from src.app.config import VERSION, APP_NAME, LOG_LEVEL
from src.app.exceptions import global_exception_handler


# =============================================================================
# LOGGING
# =============================================================================

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title=APP_NAME,
    description="Export posts and their custom fields to CSV",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# MIDDLEWARE
# =============================================================================

# The export form may be served from another origin; the download
# filename header must be readable by it.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

app.add_exception_handler(Exception, global_exception_handler)


# =============================================================================
# ROUTES
# =============================================================================

app.include_router(router, tags=["Export"])


# =============================================================================
# ROOT
# =============================================================================

@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": APP_NAME,
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "content_types": "GET /content-types",
            "fields": "GET /content-types/{content_type}/fields",
            "export": "POST /export"
        }
    }
