"""
VAULTPREP Data Models

This module provides Pydantic models for VaultPrep:
- Annotated table metadata (columns, business key groups, hashdiff groups)
- Compiled relations and omission diagnostics
- The persisted metadata document

Column sequences are plain lists throughout; their order is the order in
which business key values are concatenated for hashing downstream.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SelectionMode(str, Enum):
    """Hashdiff column selection modes."""
    SELECT_ALL = "select_all"
    SELECT_EXPLICIT = "select_explicit"


class AnnotationModel(BaseModel):
    """Base for annotation models, read and written with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ColumnMetadata(AnnotationModel):
    """One physical column of one table with its advisory role flags."""
    schema_name: str = Field("", alias="schema", description="Physical schema")
    table: str = Field("", description="Physical table")
    column: str = Field(..., description="Column name")
    data_type: str = Field("", alias="type", description="Declared type")
    is_nullable: bool = Field(True, description="Declared nullability")
    order: int = Field(0, description="Stored sort order, 0 when unset")
    is_business_key: bool = False
    is_hashkey: bool = False
    is_hashdiff: bool = False
    is_payload: bool = False
    is_record_source: bool = False
    is_load_date: bool = False

    @field_validator("is_nullable", mode="before")
    @classmethod
    def parse_nullable(cls, v):
        """Accept information_schema style YES/NO values."""
        if isinstance(v, str):
            return v.strip().upper() in ("YES", "Y", "TRUE", "1")
        return v

    @field_validator("order", mode="before")
    @classmethod
    def parse_order(cls, v):
        if v is None or v == "":
            return 0
        return v


class BusinessKeyGroup(AnnotationModel):
    """An ordered business key of one table, or a link between hubs.

    A non-link group names its hashkey and lists the key columns in hash
    order. A link group has no columns of its own; it lists the hashkey
    names of the hub groups it connects.
    """
    hashkey_name: Optional[str] = Field(None, description="Hashkey identifier")
    columns: List[str] = Field(default_factory=list, description="Key columns in hash order")
    business_concept: Optional[str] = Field(None, description="Business concept tag")
    is_link: bool = Field(False, description="Whether this group defines a link")
    linked_hashkeys: List[str] = Field(default_factory=list, description="Referenced hub hashkeys")


class HashdiffGroupBase(AnnotationModel):
    """Fields shared by both hashdiff selection modes."""
    name: str = Field(..., description="Hashdiff name")
    business_concept: Optional[str] = Field(None, description="Owning business concept")
    hashkey_name: Optional[str] = Field(None, description="Parent hashkey, resolved from the concept when unset")


class SelectAllHashdiff(HashdiffGroupBase):
    """Every payload column of the table except the excluded ones."""
    mode: Literal["select_all"] = SelectionMode.SELECT_ALL.value
    excluded_columns: List[str] = Field(default_factory=list)


class SelectExplicitHashdiff(HashdiffGroupBase):
    """Exactly the included columns."""
    mode: Literal["select_explicit"] = SelectionMode.SELECT_EXPLICIT.value
    included_columns: List[str] = Field(default_factory=list)


HashdiffGroup = Annotated[
    Union[SelectAllHashdiff, SelectExplicitHashdiff],
    Field(discriminator="mode"),
]


class TableMetadata(AnnotationModel):
    """One annotated source table."""
    schema_name: str = Field("", alias="schema", description="Physical schema")
    table: str = Field(..., description="Physical table")
    business_concept: Optional[str] = Field(None, description="Business concept tag")
    business_key_groups: List[BusinessKeyGroup] = Field(default_factory=list)
    hashdiff_groups: List[HashdiffGroup] = Field(default_factory=list)
    columns: List[ColumnMetadata] = Field(default_factory=list)

    def hub_groups(self) -> List[BusinessKeyGroup]:
        """Non-link business key groups, in declared order."""
        return [g for g in self.business_key_groups if not g.is_link]

    def link_groups(self) -> List[BusinessKeyGroup]:
        """Link business key groups, in declared order."""
        return [g for g in self.business_key_groups if g.is_link]

    def legacy_business_keys(self) -> List[ColumnMetadata]:
        """Columns carrying the pre-group business key flag."""
        return [c for c in self.columns if c.is_business_key]

    def business_key_column_names(self) -> List[str]:
        """Names of every column that belongs to a business key of this table.

        Falls back to the legacy flags when the table has no hub groups.
        """
        groups = self.hub_groups()
        if not groups:
            return [c.column for c in self.legacy_business_keys()]
        names: List[str] = []
        for group in groups:
            for name in group.columns:
                if name not in names:
                    names.append(name)
        return names

    def record_source_column(self) -> str:
        return next((c.column for c in self.columns if c.is_record_source), "")

    def load_date_column(self) -> str:
        return next((c.column for c in self.columns if c.is_load_date), "")


class MetadataDocument(AnnotationModel):
    """The annotation snapshot as persisted by the editor."""
    tables: List[TableMetadata] = Field(default_factory=list)


class Relation(BaseModel):
    """One compiled output table."""
    name: str = Field(..., description="Relation name, e.g. standard_hub")
    header: List[str] = Field(..., description="Column names")
    rows: List[List[str]] = Field(default_factory=list, description="Rows in emission order")

    def to_rows(self) -> List[List[str]]:
        """Header row followed by the data rows."""
        return [list(self.header)] + [list(row) for row in self.rows]


class Omission(BaseModel):
    """An annotation left out of a relation, and why."""
    relation: str
    schema_name: str = ""
    table: str
    group: str = ""
    reason: str
