"""
VAULTPREP Naming Resolver

Derives canonical Data Vault identifiers from raw schema and table names:
- Hub names from a business concept or a staging table name
- Source system, source object and group names
- The source table identifier that ties every output row to its table
"""

import re
from typing import Optional

DEFAULT_NAME = "DEFAULT"

HUB_PREFIXES = ("stg_", "rv_", "hub_")
_HUB_PREFIX_RE = re.compile(r"^(" + "|".join(HUB_PREFIXES) + r")", re.IGNORECASE)


def hub_name(table_name: str, business_concept: Optional[str] = None) -> str:
    """
    Derive the hub name for a table.

    Args:
        table_name (str): Physical table name, e.g. ``stg_product_master``
        business_concept (Optional[str]): Concept override, e.g. ``Customer``

    Returns:
        str: ``customer_h`` for a concept, otherwise the first token of the
        table name without its staging prefix, e.g. ``product_h``
    """
    if business_concept:
        return f"{business_concept.lower()}_h"

    cleaned = _HUB_PREFIX_RE.sub("", table_name, count=1)
    base = cleaned.split("_")[0] or cleaned
    return f"{base}_h"


def hub_identifier(name: str) -> str:
    return f"H_{name}"


def link_identifier(name: str) -> str:
    return f"L_{name}"


def satellite_identifier(name: str) -> str:
    return f"S_{name}"


def source_system(schema: str) -> str:
    """Uppercased schema, or DEFAULT when the schema is empty."""
    return (schema or "").upper() or DEFAULT_NAME


def source_object(table_name: str) -> str:
    """Uppercased first underscore token of the table name, or DEFAULT."""
    return (table_name or "").split("_")[0].upper() or DEFAULT_NAME


def group_name(schema: str) -> str:
    """Uppercased schema, or DEFAULT when the schema is empty."""
    return (schema or "").upper() or DEFAULT_NAME


def source_identifier(schema: str, table_name: str) -> str:
    """Foreign key tying an output row back to its source table."""
    return f"{source_system(schema)}_{source_object(table_name)}_{table_name}"


def strip_affixes(value: str, prefix: str, suffix: str) -> str:
    """Remove one leading prefix and one trailing suffix, when present."""
    if value.startswith(prefix):
        value = value[len(prefix):]
    if suffix and value.endswith(suffix):
        value = value[:-len(suffix)]
    return value


def hub_base_from_hashkey(hashkey: str) -> str:
    """``hk_customer_h`` -> ``customer``."""
    return strip_affixes(hashkey, "hk_", "_h")


def satellite_base_from_hashdiff(name: str) -> str:
    """``hd_customer_details_sat`` -> ``customer_details``."""
    return strip_affixes(name, "hd_", "_sat")
