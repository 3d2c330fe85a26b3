"""
Pytest configuration for VaultPrep test suite.

This module provides shared fixtures and configuration for all tests.
"""

import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from vaultprep.core.config import Config
from vaultprep.core.models import (
    BusinessKeyGroup,
    ColumnMetadata,
    SelectAllHashdiff,
    SelectExplicitHashdiff,
    TableMetadata,
)


@pytest.fixture(scope="session")
def project_root_path():
    """Return the project root path."""
    return project_root


@pytest.fixture
def config():
    """Default configuration, independent of any config.json on disk."""
    return Config(config_file=None)


@pytest.fixture
def make_table():
    """Factory for annotated tables with columns in ordinal order."""

    def _make(
        table: str,
        columns: Iterable[str],
        schema: str = "raw",
        business_concept: Optional[str] = None,
        groups: Optional[List[BusinessKeyGroup]] = None,
        hashdiffs: Optional[list] = None,
        record_source: Optional[str] = None,
        load_date: Optional[str] = None,
        legacy_keys: Iterable[str] = (),
    ) -> TableMetadata:
        legacy_keys = set(legacy_keys)
        return TableMetadata(
            schema=schema,
            table=table,
            business_concept=business_concept,
            business_key_groups=groups or [],
            hashdiff_groups=hashdiffs or [],
            columns=[
                ColumnMetadata(
                    schema=schema,
                    table=table,
                    column=name,
                    order=position,
                    is_business_key=name in legacy_keys,
                    is_record_source=name == record_source,
                    is_load_date=name == load_date,
                )
                for position, name in enumerate(columns, start=1)
            ],
        )

    return _make


@pytest.fixture
def customer_table(make_table):
    """Customer staging table with one hub and two hashdiffs."""
    return make_table(
        "stg_customer",
        ["customer_id", "name", "email", "note", "rsrc", "load_date"],
        business_concept="Customer",
        groups=[BusinessKeyGroup(hashkey_name="hk_customer_h", columns=["customer_id"],
                                 business_concept="Customer")],
        hashdiffs=[
            SelectAllHashdiff(name="hd_customer_sat", business_concept="Customer",
                              excluded_columns=["note"]),
            SelectExplicitHashdiff(name="hd_contact_sat", business_concept="Customer",
                                   included_columns=["email"]),
        ],
        record_source="rsrc",
        load_date="load_date",
    )


@pytest.fixture
def order_table(make_table):
    """Order staging table with a hub and a link to customers."""
    return make_table(
        "stg_order",
        ["order_id", "customer_id", "amount", "rsrc", "load_date"],
        business_concept="Order",
        groups=[
            BusinessKeyGroup(hashkey_name="hk_order_h", columns=["order_id"], business_concept="Order"),
            BusinessKeyGroup(hashkey_name="lk_order_customer", is_link=True,
                             linked_hashkeys=["hk_customer_h", "hk_order_h"]),
        ],
        record_source="rsrc",
        load_date="load_date",
    )


@pytest.fixture
def vault_tables(customer_table, order_table):
    return [customer_table, order_table]
