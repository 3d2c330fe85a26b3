"""
VAULTPREP Satellite Compiler

This module expands hashdiff groups into standard_satellite rows.

Each hashdiff group selects the columns feeding one satellite:
- select_all: every column of the table except the excluded ones, the
  business key columns and the record source / load date columns
- select_explicit: exactly the included columns

A group without a hashkey takes it from the table's hub group with the same
business concept. Groups without a concept, without a resolvable hashkey or
without member columns produce no rows.

Tables without hashdiff groups can optionally get one implicit satellite of
their unclassified columns (``satellite.implicit_fallback``), attached to
the table's first hub.
"""

from typing import List, Optional, Tuple

from ..core.config import Config
from ..core.models import (
    ColumnMetadata,
    SelectAllHashdiff,
    SelectExplicitHashdiff,
    TableMetadata,
)
from .base import BaseCompiler
from .hub_compiler import effective_hashkey
from . import naming

STANDARD_SATELLITE_HEADER = [
    'Satellite_Identifier',
    'Target_Satellite_Table_Physical_Name',
    'Source_Table_Identifier',
    'Source_Column_Physical_Name',
    'Parent_Identifier',
    'Parent_Primary_Key_Physical_Name',
    'Target_Column_Physical_Name',
    'Target_Column_Sort_Order',
    'Group_Name',
]


def technical_columns(table: TableMetadata) -> List[str]:
    """Record source and load date column names."""
    return [c.column for c in table.columns if c.is_record_source or c.is_load_date]


def resolve_hashdiff_hashkey(table: TableMetadata, hashdiff) -> Optional[str]:
    """
    Find the parent hashkey of a hashdiff group.

    Args:
        table (TableMetadata): Table declaring the hashdiff
        hashdiff: SelectAllHashdiff or SelectExplicitHashdiff

    Returns:
        Optional[str]: The group's own hashkey, else the hashkey the hub
        relation emits for the first hub group of the table with the same
        business concept
    """
    if hashdiff.hashkey_name:
        return hashdiff.hashkey_name
    hub = naming.hub_name(table.table, table.business_concept)
    for group in table.hub_groups():
        if group.business_concept == hashdiff.business_concept:
            return effective_hashkey(group, hub)
    return None


def hashdiff_members(table: TableMetadata, hashdiff) -> List[ColumnMetadata]:
    """Member columns of a hashdiff group, in table column order."""
    if isinstance(hashdiff, SelectAllHashdiff):
        excluded = set(hashdiff.excluded_columns)
        excluded.update(table.business_key_column_names())
        excluded.update(technical_columns(table))
        return [c for c in table.columns if c.column not in excluded]
    if isinstance(hashdiff, SelectExplicitHashdiff):
        included = set(hashdiff.included_columns)
        return [c for c in table.columns if c.column in included]
    raise TypeError(f"Unsupported hashdiff group: {type(hashdiff).__name__}")


def implicit_satellite_members(table: TableMetadata) -> List[ColumnMetadata]:
    """Columns not classified as business key, hashkey, hashdiff or technical."""
    keys = set(table.business_key_column_names())
    return [
        c for c in table.columns
        if c.column not in keys
        and not (c.is_hashkey or c.is_hashdiff or c.is_record_source or c.is_load_date)
    ]


def implicit_satellite_parent(table: TableMetadata) -> Optional[Tuple[str, str]]:
    """Hub name and hashkey of the table's first hub, if it has one."""
    hub = naming.hub_name(table.table, table.business_concept)
    groups = [g for g in table.hub_groups() if g.columns]
    if groups:
        return hub, effective_hashkey(groups[0], hub)
    if table.legacy_business_keys():
        return hub, f"hk_{hub}"
    return None


class SatelliteCompiler(BaseCompiler):
    """Satellite compiler for Data Vault satellite metadata."""

    relation_name = "standard_satellite"
    header = STANDARD_SATELLITE_HEADER

    def __init__(self, config: Optional[Config] = None, implicit_fallback: Optional[bool] = None):
        super().__init__(config)
        if implicit_fallback is None:
            implicit_fallback = self.config.implicit_satellite_fallback
        self.implicit_fallback = implicit_fallback

    def _compile_rows(self, tables: List[TableMetadata]) -> List[List[str]]:
        rows: List[List[str]] = []
        for table in tables:
            if table.hashdiff_groups:
                for hashdiff in table.hashdiff_groups:
                    rows.extend(self._compile_hashdiff(table, hashdiff))
            elif self.implicit_fallback:
                rows.extend(self._compile_implicit(table))
        return rows

    def _compile_hashdiff(self, table: TableMetadata, hashdiff) -> List[List[str]]:
        """
        Compile one hashdiff group.

        Args:
            table (TableMetadata): Table declaring the hashdiff
            hashdiff: SelectAllHashdiff or SelectExplicitHashdiff

        Returns:
            List[List[str]]: One row per member column, or none when rejected
        """
        if not hashdiff.business_concept:
            self._omit(table, "hashdiff has no business concept", group=hashdiff.name)
            return []

        hashkey = resolve_hashdiff_hashkey(table, hashdiff)
        if not hashkey:
            self._omit(table, "no hashkey for business concept "
                       f"{hashdiff.business_concept}", group=hashdiff.name)
            return []

        members = hashdiff_members(table, hashdiff)
        if not members:
            self._omit(table, "hashdiff selects no columns", group=hashdiff.name)
            return []

        if isinstance(hashdiff, SelectExplicitHashdiff):
            known = {c.column for c in table.columns}
            missing = [name for name in hashdiff.included_columns if name not in known]
            if missing:
                self.logger.warning(
                    f"Hashdiff {hashdiff.name} on {table.table} includes unknown columns: {', '.join(missing)}",
                    table=table.table, group=hashdiff.name,
                )

        base = naming.satellite_base_from_hashdiff(hashdiff.name)
        return self._satellite_rows(
            table,
            satellite_id=naming.satellite_identifier(base),
            satellite_table=f"{base}_sat",
            parent_id=naming.hub_identifier(naming.hub_base_from_hashkey(hashkey)),
            parent_key=hashkey,
            members=members,
        )

    def _compile_implicit(self, table: TableMetadata) -> List[List[str]]:
        parent = implicit_satellite_parent(table)
        if parent is None:
            self._omit(table, "no hub to attach implicit satellite")
            return []

        members = implicit_satellite_members(table)
        if not members:
            self._omit(table, "no payload columns")
            return []

        hub, hashkey = parent
        return self._satellite_rows(
            table,
            satellite_id=naming.satellite_identifier(hub),
            satellite_table=f"{hub}_sat",
            parent_id=naming.hub_identifier(hub),
            parent_key=hashkey,
            members=members,
        )

    def _satellite_rows(self, table: TableMetadata, satellite_id: str, satellite_table: str,
                        parent_id: str, parent_key: str, members: List[ColumnMetadata]) -> List[List[str]]:
        source_id = naming.source_identifier(table.schema_name, table.table)
        group_label = naming.group_name(table.schema_name)
        return [
            [
                satellite_id,
                satellite_table,
                source_id,
                column.column,
                parent_id,
                parent_key,
                column.column,
                str(column.order or position),
                group_label,
            ]
            for position, column in enumerate(members, start=1)
        ]
