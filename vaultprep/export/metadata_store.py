"""
VAULTPREP Metadata Store

Persists the editor's annotation snapshot as a JSON document:

    {"tables": [{"schema": ..., "table": ..., "businessKeyGroups": [...],
                 "hashdiffGroups": [...], "columns": [...]}]}

Documents are validated through the annotation models on load. A bare list
of tables is accepted as well.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from ..core.config import Config
from ..core.errors import MetadataLoadError
from ..core.logger import Logger
from ..core.models import MetadataDocument, TableMetadata

DEFAULT_METADATA_FILE = "metadata.json"


class MetadataStore:
    """Reads and writes annotation snapshots."""

    def __init__(self, path: Union[str, Path] = DEFAULT_METADATA_FILE, config: Optional[Config] = None):
        self.path = Path(path)
        self.logger = Logger("metadata_store", config=config)

    def load(self) -> List[TableMetadata]:
        """
        Load the annotated tables.

        Returns:
            List[TableMetadata]: Tables in document order

        Raises:
            MetadataLoadError: If the file is missing, not JSON, or invalid
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise MetadataLoadError(f"Metadata file not found: {self.path}") from e
        except json.JSONDecodeError as e:
            raise MetadataLoadError(f"Metadata file is not valid JSON: {self.path}", details=str(e)) from e

        tables = parse_tables(data)
        self.logger.info(f"Loaded {len(tables)} tables from {self.path}")
        return tables

    def save(self, tables: List[TableMetadata]) -> Path:
        """Write the annotated tables, creating parent directories."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        document = MetadataDocument(tables=tables)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(document.model_dump(mode="json", by_alias=True), f, indent=2)
            f.write("\n")
        self.logger.info(f"Saved {len(tables)} tables to {self.path}")
        return self.path


def parse_tables(data) -> List[TableMetadata]:
    """
    Validate raw annotation data.

    Args:
        data: A ``{"tables": [...]}`` document or a list of tables

    Returns:
        List[TableMetadata]: Validated tables

    Raises:
        MetadataLoadError: If the data does not match the annotation models
    """
    if isinstance(data, list):
        data = {"tables": data}
    try:
        return MetadataDocument.model_validate(data).tables
    except ValidationError as e:
        raise MetadataLoadError("Metadata document is invalid", details=str(e)) from e
