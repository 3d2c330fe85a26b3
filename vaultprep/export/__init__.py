"""
VAULTPREP Export Package

Serialization and persistence around the compilers:
- Relation serializer (CSV text)
- CSV file writer
- Metadata store (annotation snapshots as JSON)
- VaultExporter orchestrating the four canonical relations
"""

from .csv_serializer import rows_to_csv, escape_field
from .csv_writer import CSVFileWriter
from .metadata_store import MetadataStore, parse_tables
from .exporter import (
    RELATIONS,
    VaultExporter,
    export_source_data,
    export_standard_hub,
    export_standard_satellite,
    export_standard_link,
    export_denormalized,
)

__all__ = [
    'rows_to_csv',
    'escape_field',
    'CSVFileWriter',
    'MetadataStore',
    'parse_tables',
    'RELATIONS',
    'VaultExporter',
    'export_source_data',
    'export_standard_hub',
    'export_standard_satellite',
    'export_standard_link',
    'export_denormalized',
]
