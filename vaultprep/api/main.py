"""
VAULTPREP FastAPI Main Application

Serves the metadata compiler to the annotation editor over HTTP.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .export_routes import export_router

from .. import __version__
from ..core.config import Config
from ..core.logger import Logger

# Initialize configuration and logging
config = Config()
logger = Logger("api", config=config)

# Create FastAPI application
app = FastAPI(
    title="VaultPrep API",
    description="Data Vault 2.1 metadata compiler",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",           # Local editor
        "http://localhost:8000",           # API docs
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(export_router, tags=["Export"])


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "VaultPrep API - Data Vault 2.1 metadata compiler",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "VaultPrep API"}


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "detail": str(exc)}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.get("api.host", "0.0.0.0"), port=config.get("api.port", 8000))
