"""
VAULTPREP Schema Introspector

This module reads the column inventory of a source database and seeds
un-annotated table metadata for the editor:
- Schemas and tables, excluding system catalogs
- Columns in ordinal order with declared type and nullability
"""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..core.config import Config
from ..core.logger import Logger
from ..core.models import ColumnMetadata, TableMetadata

EXCLUDED_SCHEMAS = ("information_schema", "pg_catalog")


class SchemaIntrospector:
    """
    Schema introspector for seeding table metadata from a database.
    """

    def __init__(self, connection_url: Optional[str] = None, engine: Optional[Engine] = None,
                 config: Optional[Config] = None):
        """
        Initialize the introspector.

        Args:
            connection_url (Optional[str]): SQLAlchemy URL, e.g. ``duckdb:///vault.duckdb``
            engine (Optional[Engine]): Existing engine, used instead of the URL
            config (Optional[Config]): Configuration for logging
        """
        if engine is None and not connection_url:
            raise ValueError("A connection URL or an engine is required")
        self.connection_url = connection_url
        self._engine = engine
        self._owns_engine = engine is None
        self.logger = Logger("schema_introspector", config=config)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(self.connection_url)
        return self._engine

    def get_schemas(self) -> List[str]:
        """List user schemas in database order."""
        inspector = inspect(self.engine)
        return [s for s in inspector.get_schema_names() if s.lower() not in EXCLUDED_SCHEMAS]

    def get_tables(self, schema: Optional[str] = None) -> List[str]:
        """List table names of a schema, sorted by name."""
        inspector = inspect(self.engine)
        return sorted(inspector.get_table_names(schema=schema))

    def get_table_metadata(self, schemas: Optional[Sequence[str]] = None) -> List[TableMetadata]:
        """
        Read every table of the selected schemas.

        Args:
            schemas (Optional[Sequence[str]]): Schemas to read; all user schemas when omitted

        Returns:
            List[TableMetadata]: Tables ordered by schema then table, columns by ordinal position

        Raises:
            SQLAlchemyError: If the database cannot be read
        """
        try:
            inspector = inspect(self.engine)
            selected = list(schemas) if schemas else self.get_schemas()
            tables: List[TableMetadata] = []

            for schema in sorted(selected):
                for table_name in sorted(inspector.get_table_names(schema=schema)):
                    columns = inspector.get_columns(table_name, schema=schema)
                    tables.append(self._to_table_metadata(schema, table_name, columns))

            self.logger.info(f"Introspected {len(tables)} tables from {len(selected)} schemas")
            return tables

        except SQLAlchemyError as e:
            self.logger.error(f"Error introspecting schema: {str(e)}")
            raise

    def _to_table_metadata(self, schema: str, table_name: str, columns: List[Dict[str, Any]]) -> TableMetadata:
        return TableMetadata(
            schema=schema,
            table=table_name,
            columns=[
                ColumnMetadata(
                    schema=schema,
                    table=table_name,
                    column=column["name"],
                    type=str(column["type"]),
                    is_nullable=column.get("nullable", True),
                    order=position,
                )
                for position, column in enumerate(columns, start=1)
            ],
        )

    def dispose(self) -> None:
        """Release the engine if this introspector created it."""
        if self._engine is not None and self._owns_engine:
            self._engine.dispose()
            self._engine = None
