"""
VAULTPREP Core Components

This module provides functionality shared across the compiler and its
export surfaces:
- Configuration management
- Logging
- Annotation and relation models
- Exceptions
"""

from .config import Config
from .logger import Logger
from .errors import VaultPrepError, DuplicateHashkeyError, MetadataLoadError
from .models import (
    ColumnMetadata,
    BusinessKeyGroup,
    SelectAllHashdiff,
    SelectExplicitHashdiff,
    TableMetadata,
    MetadataDocument,
    Relation,
    Omission,
)

__all__ = [
    'Config',
    'Logger',
    'VaultPrepError',
    'DuplicateHashkeyError',
    'MetadataLoadError',
    'ColumnMetadata',
    'BusinessKeyGroup',
    'SelectAllHashdiff',
    'SelectExplicitHashdiff',
    'TableMetadata',
    'MetadataDocument',
    'Relation',
    'Omission',
]
