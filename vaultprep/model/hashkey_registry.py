"""
VAULTPREP Hashkey Registry

Maps every explicitly named hub hashkey to the table and business key group
that own it. Link and hashdiff resolution look names up here instead of
scanning all tables, and the registry is rebuilt for every export call.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.config import Config
from ..core.errors import DuplicateHashkeyError
from ..core.logger import Logger
from ..core.models import BusinessKeyGroup, TableMetadata
from . import naming


@dataclass(frozen=True)
class HubReference:
    """Owner of one hub hashkey."""
    hashkey_name: str
    table: TableMetadata
    group: BusinessKeyGroup
    hub_name: str
    hub_identifier: str
    columns: List[str] = field(default_factory=list)

    @property
    def owner(self) -> str:
        return f"{self.table.schema_name}.{self.table.table}"


class HashkeyRegistry:
    """Lookup table from hashkey name to its owning hub group."""

    def __init__(self, references: Dict[str, HubReference]):
        self._references = references

    @classmethod
    def build(cls, tables: List[TableMetadata], config: Optional[Config] = None) -> "HashkeyRegistry":
        """
        Register the named non-link groups of every table.

        Args:
            tables (List[TableMetadata]): Full annotated table list
            config (Optional[Config]): Supplies ``registry.duplicate_policy``

        Returns:
            HashkeyRegistry: Registry for this table list

        Raises:
            DuplicateHashkeyError: If two groups share a name under the
                ``error`` policy
        """
        config = config or Config()
        policy = config.duplicate_hashkey_policy
        references: Dict[str, HubReference] = {}

        for table in tables:
            name = naming.hub_name(table.table, table.business_concept)
            for group in table.hub_groups():
                if not group.hashkey_name:
                    continue
                reference = HubReference(
                    hashkey_name=group.hashkey_name,
                    table=table,
                    group=group,
                    hub_name=name,
                    hub_identifier=naming.hub_identifier(name),
                    columns=list(group.columns),
                )
                existing = references.get(group.hashkey_name)
                if existing is None:
                    references[group.hashkey_name] = reference
                elif policy == "first_match":
                    Logger("hashkey_registry", config=config).warning(
                        f"Hashkey {group.hashkey_name} redefined by {reference.owner}; "
                        f"keeping {existing.owner}"
                    )
                else:
                    raise DuplicateHashkeyError(group.hashkey_name, [existing.owner, reference.owner])

        return cls(references)

    def resolve(self, hashkey_name: str) -> Optional[HubReference]:
        return self._references.get(hashkey_name)

    def __contains__(self, hashkey_name: str) -> bool:
        return hashkey_name in self._references

    def __len__(self) -> int:
        return len(self._references)
