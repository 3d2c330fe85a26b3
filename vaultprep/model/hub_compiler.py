"""
VAULTPREP Hub Compiler

This module expands business key groups into standard_hub rows:
- One row per key column, in group order
- Sort order is the column's position within its group, not its ordinal
- The first emitted row of each table is its primary source

Tables annotated before business key groups existed carry a per-column
business key flag instead. Those flagged columns are compiled as a single
implicit group.
"""

from typing import List

from ..core.models import BusinessKeyGroup, TableMetadata
from .base import BaseCompiler
from . import naming

STANDARD_HUB_HEADER = [
    'Hub_Identifier',
    'Target_Hub_table_physical_name',
    'Source_Table_Identifier',
    'Source_Column_Physical_Name',
    'Business_Key_Physical_Name',
    'Target_Column_Sort_Order',
    'Target_Primary_Key_Physical_Name',
    'Record_Tracking_Satellite',
    'Is_Primary_Source',
    'Group_Name',
]


def effective_hashkey(group: BusinessKeyGroup, hub: str) -> str:
    """The group's hashkey name, or ``hk_{hub}`` when it has none."""
    return group.hashkey_name or f"hk_{hub}"


class HubCompiler(BaseCompiler):
    """Hub compiler for Data Vault hub metadata."""

    relation_name = "standard_hub"
    header = STANDARD_HUB_HEADER

    def _compile_rows(self, tables: List[TableMetadata]) -> List[List[str]]:
        rows: List[List[str]] = []
        for table in tables:
            rows.extend(self._compile_table(table))
        return rows

    def _compile_table(self, table: TableMetadata) -> List[List[str]]:
        """
        Compile the hub rows of one table.

        Args:
            table (TableMetadata): Annotated table

        Returns:
            List[List[str]]: Hub rows, primary source first
        """
        hub = naming.hub_name(table.table, table.business_concept)
        groups = table.hub_groups()

        if groups:
            keyed = []
            for index, group in enumerate(groups, start=1):
                if not group.columns:
                    self._omit(table, "business key group has no columns",
                               group=group.hashkey_name or f"#{index}")
                    continue
                keyed.append((effective_hashkey(group, hub),
                              [(name, position) for position, name in enumerate(group.columns, start=1)]))
        else:
            flagged = table.legacy_business_keys()
            if not flagged:
                self._omit(table, "no business keys")
                return []
            # Legacy flags: stored order, or position among the flagged columns
            keyed = [(f"hk_{hub}",
                      [(c.column, c.order or position) for position, c in enumerate(flagged, start=1)])]

        rows = []
        for hashkey, members in keyed:
            for column, sort_order in members:
                rows.append(self._hub_row(table, hub, hashkey, column, sort_order, primary=not rows))
        return rows

    def _hub_row(self, table: TableMetadata, hub: str, hashkey: str, column: str,
                 sort_order: int, primary: bool) -> List[str]:
        return [
            naming.hub_identifier(hub),
            hub,
            naming.source_identifier(table.schema_name, table.table),
            column,
            column,
            str(sort_order),
            hashkey,
            '',
            '1' if primary else '0',
            naming.group_name(table.schema_name),
        ]
