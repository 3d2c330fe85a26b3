"""
VAULTPREP API Package

FastAPI application and routers for the metadata compiler.
"""

from .export_routes import export_router

__all__ = ['export_router']
