"""
VAULTPREP Export API Routes

This module provides API endpoints for compiling an annotated snapshot:
- Individual relations as CSV
- All four canonical relations with their omissions
- The denormalized single-file view
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from ..core.config import Config
from ..core.errors import DuplicateHashkeyError
from ..core.models import MetadataDocument
from ..export.exporter import RELATIONS, VaultExporter

logger = logging.getLogger(__name__)

# Create router
export_router = APIRouter(prefix="/api/v1/export", tags=["Export"])

CSV_MEDIA_TYPE = "text/csv"


# Dependency for the exporter
def get_exporter() -> VaultExporter:
    return VaultExporter(Config())


def _csv_response(content: str) -> PlainTextResponse:
    return PlainTextResponse(content, media_type=CSV_MEDIA_TYPE)


@export_router.get("/relations")
async def list_relations() -> Dict[str, Any]:
    """List the relations this API can export."""
    return {"relations": RELATIONS, "denormalized": "denormalized"}


@export_router.post("/all")
async def export_all(document: MetadataDocument, exporter: VaultExporter = Depends(get_exporter)):
    """
    Compile the four canonical relations.

    Returns:
        Dict[str, Any]: CSV text per file name plus the omitted annotations
    """
    try:
        files = exporter.export_all(document.tables)
        return {
            "status": "success",
            "files": files,
            "omissions": [o.model_dump() for o in exporter.omissions],
        }
    except DuplicateHashkeyError as e:
        logger.warning(f"Export rejected: {e.message} ({e.details})")
        raise HTTPException(status_code=400, detail=f"{e.message}: {e.details}")


@export_router.post("/denormalized")
async def export_denormalized(document: MetadataDocument, exporter: VaultExporter = Depends(get_exporter)):
    """Compile the one-row-per-column view as CSV."""
    try:
        return _csv_response(exporter.export_denormalized(document.tables))
    except DuplicateHashkeyError as e:
        logger.warning(f"Export rejected: {e.message} ({e.details})")
        raise HTTPException(status_code=400, detail=f"{e.message}: {e.details}")


@export_router.post("/{relation}")
async def export_relation(relation: str, document: MetadataDocument,
                          exporter: VaultExporter = Depends(get_exporter)):
    """
    Compile one canonical relation as CSV.

    Args:
        relation (str): source_data, standard_hub, standard_satellite or standard_link
    """
    if relation not in RELATIONS:
        raise HTTPException(status_code=404, detail=f"Unknown relation: {relation}")
    try:
        return _csv_response(exporter.export(relation, document.tables))
    except DuplicateHashkeyError as e:
        logger.warning(f"Export rejected: {e.message} ({e.details})")
        raise HTTPException(status_code=400, detail=f"{e.message}: {e.details}")
