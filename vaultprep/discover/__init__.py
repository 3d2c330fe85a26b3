"""
VAULTPREP Discover Package

Reads source database schemas to seed table metadata before annotation.
"""

from .schema_introspector import SchemaIntrospector

__all__ = ['SchemaIntrospector']
