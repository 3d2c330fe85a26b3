"""
VAULTPREP Denormalized Exporter

Flattens the hub, link and satellite facts into one row per physical column.
Membership is decided by the same resolution rules the relation compilers
use, so the flat view and the relations never disagree.
"""

from typing import Dict, List, Optional, Set

from ..core.config import Config
from ..core.models import TableMetadata
from .base import BaseCompiler
from .hashkey_registry import HashkeyRegistry
from .hub_compiler import effective_hashkey
from .link_compiler import link_name
from .satellite_compiler import (
    hashdiff_members,
    implicit_satellite_members,
    implicit_satellite_parent,
    resolve_hashdiff_hashkey,
)
from . import naming

DENORMALIZED_HEADER = [
    'Source_Schema_Physical_Name',
    'Source_Table_Physical_Name',
    'Column_Name',
    'Ordinal_Position',
    'Data_Type',
    'Is_Nullable',
    'Business_Concept',
    'Hub_Hashkey',
    'Link_Hashkey',
    'Hashdiff_Groups',
    'Is_Record_Source',
    'Is_Load_Date',
    'Create_Satellite',
]

HASHDIFF_SEPARATOR = ";"


def _flag(value: bool) -> str:
    return '1' if value else '0'


class DenormalizedExporter(BaseCompiler):
    """One browsable row per column instead of one relation per entity."""

    relation_name = "denormalized_metadata"
    header = DENORMALIZED_HEADER

    def __init__(self, config: Optional[Config] = None, implicit_fallback: Optional[bool] = None):
        super().__init__(config)
        if implicit_fallback is None:
            implicit_fallback = self.config.implicit_satellite_fallback
        self.implicit_fallback = implicit_fallback

    def _compile_rows(self, tables: List[TableMetadata]) -> List[List[str]]:
        registry = HashkeyRegistry.build(tables, self.config)
        rows: List[List[str]] = []
        for table in tables:
            hub_keys = self._hub_hashkeys(table)
            link_keys = self._link_hashkeys(table, registry)
            hashdiffs = self._hashdiff_memberships(table)
            implicit = self._implicit_members(table)

            for position, column in enumerate(table.columns, start=1):
                groups = hashdiffs.get(column.column, [])
                rows.append([
                    table.schema_name,
                    table.table,
                    column.column,
                    str(column.order or position),
                    column.data_type,
                    _flag(column.is_nullable),
                    table.business_concept or '',
                    hub_keys.get(column.column, ''),
                    link_keys.get(column.column, ''),
                    HASHDIFF_SEPARATOR.join(groups),
                    _flag(column.is_record_source),
                    _flag(column.is_load_date),
                    _flag(bool(groups) or column.column in implicit),
                ])
        return rows

    def _hub_hashkeys(self, table: TableMetadata) -> Dict[str, str]:
        """Column name to the hashkey of the first hub group containing it."""
        hub = naming.hub_name(table.table, table.business_concept)
        keys: Dict[str, str] = {}
        groups = table.hub_groups()
        if groups:
            for group in groups:
                for column in group.columns:
                    keys.setdefault(column, effective_hashkey(group, hub))
        else:
            for column in table.legacy_business_keys():
                keys.setdefault(column.column, f"hk_{hub}")
        return keys

    def _link_hashkeys(self, table: TableMetadata, registry: HashkeyRegistry) -> Dict[str, str]:
        """Column name to the first link of this table whose referenced hubs use it."""
        keys: Dict[str, str] = {}
        for position, group in enumerate(table.link_groups(), start=1):
            name = link_name(table, group, position)
            for hashkey in group.linked_hashkeys:
                reference = registry.resolve(hashkey)
                if reference is None:
                    continue
                for column in reference.columns:
                    keys.setdefault(column, name)
        return keys

    def _hashdiff_memberships(self, table: TableMetadata) -> Dict[str, List[str]]:
        """Column name to the names of the emitted hashdiff groups it feeds."""
        memberships: Dict[str, List[str]] = {}
        for hashdiff in table.hashdiff_groups:
            if not hashdiff.business_concept or not resolve_hashdiff_hashkey(table, hashdiff):
                continue
            for column in hashdiff_members(table, hashdiff):
                memberships.setdefault(column.column, []).append(hashdiff.name)
        return memberships

    def _implicit_members(self, table: TableMetadata) -> Set[str]:
        if table.hashdiff_groups or not self.implicit_fallback:
            return set()
        if implicit_satellite_parent(table) is None:
            return set()
        return {c.column for c in implicit_satellite_members(table)}
