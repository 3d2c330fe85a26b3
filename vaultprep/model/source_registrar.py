"""
VAULTPREP Source Registrar

Emits the source_data relation: one registration row per source table.
"""

from typing import List

from ..core.models import TableMetadata
from .base import BaseCompiler
from . import naming

SOURCE_DATA_HEADER = [
    'Source_System',
    'Source_Object',
    'Source_Schema_Physical_Name',
    'Source_Table_Physical_Name',
    'Source_Table_Identifier',
    'Record_Source_Column',
    'Load_Date_Column',
    'Group_Name',
    'Static_Part_of_Record_Source_Column',
]


class SourceRegistrar(BaseCompiler):
    """Registers every table as a source, without filtering."""

    relation_name = "source_data"
    header = SOURCE_DATA_HEADER

    def _compile_rows(self, tables: List[TableMetadata]) -> List[List[str]]:
        rows = []
        for table in tables:
            system = naming.source_system(table.schema_name)
            rows.append([
                system,
                naming.source_object(table.table),
                table.schema_name,
                table.table,
                naming.source_identifier(table.schema_name, table.table),
                table.record_source_column(),
                table.load_date_column(),
                naming.group_name(table.schema_name),
                system.upper(),
            ])
        return rows
