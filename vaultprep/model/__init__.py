"""
VAULTPREP Model Package

This package contains the annotation-to-relation compilers that turn an
annotated table inventory into Data Vault metadata.

Components:
- SourceRegistrar: source_data rows
- HubCompiler: standard_hub rows
- LinkCompiler: standard_link rows
- SatelliteCompiler: standard_satellite rows
- DenormalizedExporter: one flat row per column
- HashkeyRegistry: hashkey name to owning hub group
"""

from .source_registrar import SourceRegistrar
from .hub_compiler import HubCompiler
from .link_compiler import LinkCompiler
from .satellite_compiler import SatelliteCompiler
from .denormalized_exporter import DenormalizedExporter
from .hashkey_registry import HashkeyRegistry, HubReference

__all__ = [
    'SourceRegistrar',
    'HubCompiler',
    'LinkCompiler',
    'SatelliteCompiler',
    'DenormalizedExporter',
    'HashkeyRegistry',
    'HubReference',
]
