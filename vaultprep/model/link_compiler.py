"""
VAULTPREP Link Compiler

This module expands link groups into standard_link rows. A link group lists
the hashkey names of the hubs it connects; each name is resolved through the
hashkey registry to the owning hub group and its ordered key columns.

References that do not resolve to any columns follow
``link.unresolved_policy``:
- ``placeholder``: one row with blank column fields, keeping the
  link-to-hub relationship visible
- ``skip``: no row
"""

from typing import List, Optional

from ..core.config import Config
from ..core.models import BusinessKeyGroup, TableMetadata
from .base import BaseCompiler
from .hashkey_registry import HashkeyRegistry
from . import naming

STANDARD_LINK_HEADER = [
    'Link_Identifier',
    'Target_link_table_physical_name',
    'Source_Table_Identifier',
    'Source_Column_Physical_Name',
    'Hub_Identifier',
    'Hub_primary_key_physical_name',
    'Target_column_physical_name',
    'Target_Primary_Key_Physical_Name',
    'Group_Name',
]

UNRESOLVED_POLICIES = ("placeholder", "skip")


def link_name(table: TableMetadata, group: BusinessKeyGroup, position: int) -> str:
    """The link's hashkey name, or ``lk_{table}_{position}`` when it has none."""
    return group.hashkey_name or f"lk_{table.table}_{position}"


class LinkCompiler(BaseCompiler):
    """Link compiler for Data Vault link metadata."""

    relation_name = "standard_link"
    header = STANDARD_LINK_HEADER

    def __init__(self, config: Optional[Config] = None, unresolved_policy: Optional[str] = None):
        super().__init__(config)
        self.unresolved_policy = unresolved_policy or self.config.unresolved_link_policy
        if self.unresolved_policy not in UNRESOLVED_POLICIES:
            raise ValueError(f"Unsupported unresolved link policy: {self.unresolved_policy}")

    def _compile_rows(self, tables: List[TableMetadata]) -> List[List[str]]:
        registry = HashkeyRegistry.build(tables, self.config)
        rows: List[List[str]] = []
        for table in tables:
            for position, group in enumerate(table.link_groups(), start=1):
                rows.extend(self._compile_link(table, group, position, registry))
        return rows

    def _compile_link(self, table: TableMetadata, group: BusinessKeyGroup, position: int,
                      registry: HashkeyRegistry) -> List[List[str]]:
        """
        Compile one link group.

        Args:
            table (TableMetadata): Table that declares the link
            group (BusinessKeyGroup): The link group
            position (int): 1-based position among the table's link groups
            registry (HashkeyRegistry): Hub hashkeys of the whole table list

        Returns:
            List[List[str]]: Rows for every referenced hub, in reference order
        """
        name = link_name(table, group, position)
        if not group.linked_hashkeys:
            self._omit(table, "link references no hubs", group=name)
            return []

        source_id = naming.source_identifier(table.schema_name, table.table)
        group_label = naming.group_name(table.schema_name)

        def row(column: str, hub_id: str, hashkey: str) -> List[str]:
            return [
                naming.link_identifier(name),
                name,
                source_id,
                column,
                hub_id,
                hashkey,
                column,
                name,
                group_label,
            ]

        rows = []
        for hashkey in group.linked_hashkeys:
            reference = registry.resolve(hashkey)
            if reference is not None and reference.columns:
                rows.extend(row(column, reference.hub_identifier, hashkey) for column in reference.columns)
                continue

            reason = "referenced hub has no columns" if reference else f"unresolved hashkey {hashkey}"
            self._omit(table, reason, group=name)
            if self.unresolved_policy == "placeholder":
                rows.append(row('', reference.hub_identifier if reference else '', hashkey))
        return rows
