"""
VAULTPREP Compiler Base

Shared plumbing for the relation compilers: configuration, logging and the
omission record each compile call produces.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.config import Config
from ..core.logger import Logger
from ..core.models import Omission, Relation, TableMetadata


class BaseCompiler(ABC):
    """Base class for all relation compilers.

    A compiler is a pure function of the table list it is given. The only
    state it keeps is the omission list of its most recent call.
    """

    relation_name: str = ""
    header: List[str] = []

    def __init__(self, config: Optional[Config] = None):
        """Initialize compiler with configuration."""
        self.config = config or Config()
        self.logger = Logger(self.relation_name or "compiler", config=self.config)
        self.omissions: List[Omission] = []

    def compile(self, tables: List[TableMetadata]) -> Relation:
        """
        Compile the relation for a full table list.

        Args:
            tables (List[TableMetadata]): Annotated tables, in input order

        Returns:
            Relation: Header and rows in emission order
        """
        self.omissions = []
        self.logger.log_export_start(self.relation_name, len(tables))
        rows = self._compile_rows(tables)
        self.logger.log_export_complete(self.relation_name, len(rows))
        return Relation(name=self.relation_name, header=list(self.header), rows=rows)

    @abstractmethod
    def _compile_rows(self, tables: List[TableMetadata]) -> List[List[str]]:
        """Produce the data rows of the relation."""
        pass

    def _omit(self, table: TableMetadata, reason: str, group: str = "") -> None:
        """Record and log an annotation left out of this relation."""
        self.omissions.append(Omission(
            relation=self.relation_name,
            schema_name=table.schema_name,
            table=table.table,
            group=group,
            reason=reason,
        ))
        self.logger.log_omission(self.relation_name, table.table, group, reason)
