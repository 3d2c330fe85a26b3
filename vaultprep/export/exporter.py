"""
VAULTPREP Exporter

Runs the relation compilers over one annotated snapshot and serializes
their output. Each compiler scans the full table list independently; none
of them modifies it, so repeated exports of the same snapshot are
byte-identical.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..core.config import Config
from ..core.logger import Logger
from ..core.models import Omission, Relation, TableMetadata
from ..model.base import BaseCompiler
from ..model.denormalized_exporter import DenormalizedExporter
from ..model.hub_compiler import HubCompiler
from ..model.link_compiler import LinkCompiler
from ..model.satellite_compiler import SatelliteCompiler
from ..model.source_registrar import SourceRegistrar
from .csv_serializer import rows_to_csv
from .csv_writer import CSVFileWriter

RELATIONS = ["source_data", "standard_hub", "standard_satellite", "standard_link"]


class VaultExporter:
    """Compiles and serializes the Data Vault metadata relations."""

    def __init__(self, config: Optional[Config] = None):
        """Initialize the exporter with one set of compilers."""
        self.config = config or Config()
        self.logger = Logger("exporter", config=self.config)
        self.compilers: Dict[str, BaseCompiler] = {
            "source_data": SourceRegistrar(self.config),
            "standard_hub": HubCompiler(self.config),
            "standard_satellite": SatelliteCompiler(self.config),
            "standard_link": LinkCompiler(self.config),
            "denormalized": DenormalizedExporter(self.config),
        }
        self.omissions: List[Omission] = []

    def compile(self, relation: str, tables: List[TableMetadata]) -> Relation:
        """
        Compile one relation.

        Args:
            relation (str): One of RELATIONS, or ``denormalized``
            tables (List[TableMetadata]): Annotated tables

        Returns:
            Relation: Compiled relation

        Raises:
            KeyError: If the relation is unknown
            DuplicateHashkeyError: If hashkey names are ambiguous
        """
        if relation not in self.compilers:
            raise KeyError(f"Unknown relation: {relation}")
        compiler = self.compilers[relation]
        result = compiler.compile(tables)
        self.omissions = list(compiler.omissions)
        return result

    def export(self, relation: str, tables: List[TableMetadata]) -> str:
        """Compile one relation and serialize it to CSV text."""
        return rows_to_csv(self.compile(relation, tables).to_rows())

    def export_source_data(self, tables: List[TableMetadata]) -> str:
        return self.export("source_data", tables)

    def export_standard_hub(self, tables: List[TableMetadata]) -> str:
        return self.export("standard_hub", tables)

    def export_standard_satellite(self, tables: List[TableMetadata]) -> str:
        return self.export("standard_satellite", tables)

    def export_standard_link(self, tables: List[TableMetadata]) -> str:
        return self.export("standard_link", tables)

    def export_denormalized(self, tables: List[TableMetadata]) -> str:
        return self.export("denormalized", tables)

    def export_all(self, tables: List[TableMetadata]) -> Dict[str, str]:
        """
        Compile the four canonical relations.

        Returns:
            Dict[str, str]: File stem to CSV text, in RELATIONS order. The
            omissions of all four compilers are kept on ``self.omissions``.
        """
        exports: Dict[str, str] = {}
        omissions: List[Omission] = []
        for relation in RELATIONS:
            exports[self.config.export_filename(relation)] = self.export(relation, tables)
            omissions.extend(self.omissions)
        self.omissions = omissions
        if omissions:
            self.logger.warning(f"{len(omissions)} annotations were left out of the export")
        return exports

    def write(self, tables: List[TableMetadata], output_dir: Optional[Union[str, Path]] = None,
              denormalized: bool = False) -> List[Path]:
        """Export and write CSV files, returning the written paths."""
        writer = CSVFileWriter(output_dir, config=self.config)
        if denormalized:
            name = self.config.export_filename("denormalized")
            return [writer.write(name, self.export_denormalized(tables))]
        return writer.write_all(self.export_all(tables))


def export_source_data(tables: List[TableMetadata], config: Optional[Config] = None) -> str:
    return VaultExporter(config).export_source_data(tables)


def export_standard_hub(tables: List[TableMetadata], config: Optional[Config] = None) -> str:
    return VaultExporter(config).export_standard_hub(tables)


def export_standard_satellite(tables: List[TableMetadata], config: Optional[Config] = None) -> str:
    return VaultExporter(config).export_standard_satellite(tables)


def export_standard_link(tables: List[TableMetadata], config: Optional[Config] = None) -> str:
    return VaultExporter(config).export_standard_link(tables)


def export_denormalized(tables: List[TableMetadata], config: Optional[Config] = None) -> str:
    return VaultExporter(config).export_denormalized(tables)
