"""
Tests for the VaultPrep satellite compiler.
"""

from vaultprep.core.models import (
    BusinessKeyGroup,
    ColumnMetadata,
    SelectAllHashdiff,
    SelectExplicitHashdiff,
    TableMetadata,
)
from vaultprep.model.satellite_compiler import (
    STANDARD_SATELLITE_HEADER,
    SatelliteCompiler,
    hashdiff_members,
    resolve_hashdiff_hashkey,
)

SATELLITE = STANDARD_SATELLITE_HEADER.index("Satellite_Identifier")
COLUMN = STANDARD_SATELLITE_HEADER.index("Source_Column_Physical_Name")
PARENT = STANDARD_SATELLITE_HEADER.index("Parent_Identifier")
PARENT_KEY = STANDARD_SATELLITE_HEADER.index("Parent_Primary_Key_Physical_Name")
SORT = STANDARD_SATELLITE_HEADER.index("Target_Column_Sort_Order")

CUSTOMER_GROUP = BusinessKeyGroup(hashkey_name="hk_customer_h", columns=["customer_id"],
                                  business_concept="Customer")


def customer(make_table, *hashdiffs):
    return make_table(
        "stg_customer",
        ["customer_id", "name", "email", "note", "rsrc", "load_date"],
        groups=[CUSTOMER_GROUP],
        hashdiffs=list(hashdiffs),
        record_source="rsrc",
        load_date="load_date",
    )


class TestSelectAll:
    """Test cases for select_all hashdiffs."""

    def test_excluded_column_is_absent(self, config, make_table):
        table = customer(make_table, SelectAllHashdiff(
            name="hd_customer_sat", business_concept="Customer", excluded_columns=["note"]))

        rows = SatelliteCompiler(config).compile([table]).rows

        assert [r[COLUMN] for r in rows] == ["name", "email"]

    def test_removing_exclusion_adds_column(self, config, make_table):
        table = customer(make_table, SelectAllHashdiff(
            name="hd_customer_sat", business_concept="Customer"))

        rows = SatelliteCompiler(config).compile([table]).rows

        assert [r[COLUMN] for r in rows] == ["name", "email", "note"]

    def test_row_values(self, config, customer_table):
        rows = SatelliteCompiler(config).compile([customer_table]).rows

        assert rows[0] == [
            "S_customer",
            "customer_sat",
            "RAW_STG_stg_customer",
            "name",
            "H_customer",
            "hk_customer_h",
            "name",
            "2",
            "RAW",
        ]

    def test_sort_order_falls_back_to_position(self, config):
        table = TableMetadata(
            schema="raw",
            table="stg_customer",
            business_key_groups=[CUSTOMER_GROUP],
            hashdiff_groups=[SelectAllHashdiff(name="hd_customer_sat", business_concept="Customer")],
            columns=[
                ColumnMetadata(column="customer_id"),
                ColumnMetadata(column="name"),
                ColumnMetadata(column="email", order=7),
            ],
        )

        rows = SatelliteCompiler(config).compile([table]).rows

        assert [r[SORT] for r in rows] == ["1", "7"]


class TestSelectExplicit:
    """Test cases for select_explicit hashdiffs."""

    def test_included_columns_in_table_order(self, config, make_table):
        table = customer(make_table, SelectExplicitHashdiff(
            name="hd_contact_sat", business_concept="Customer", included_columns=["note", "email"]))

        rows = SatelliteCompiler(config).compile([table]).rows

        assert [r[COLUMN] for r in rows] == ["email", "note"]
        assert [r[SORT] for r in rows] == ["3", "4"]
        assert rows[0][SATELLITE] == "S_contact"

    def test_explicit_may_include_key_columns(self, make_table):
        table = customer(make_table)
        hashdiff = SelectExplicitHashdiff(name="hd_x", business_concept="Customer",
                                          included_columns=["customer_id"])

        assert [c.column for c in hashdiff_members(table, hashdiff)] == ["customer_id"]

    def test_groups_are_compiled_in_input_order(self, config, customer_table):
        rows = SatelliteCompiler(config).compile([customer_table]).rows
        assert [r[SATELLITE] for r in rows] == ["S_customer", "S_customer", "S_contact"]


class TestHashkeyResolution:
    """Test cases for resolving the parent hashkey."""

    def test_hashkey_from_business_concept(self, make_table):
        table = customer(make_table)
        hashdiff = SelectAllHashdiff(name="hd_customer_sat", business_concept="Customer")

        assert resolve_hashdiff_hashkey(table, hashdiff) == "hk_customer_h"

    def test_unnamed_hub_group_uses_emitted_hashkey(self, config, make_table):
        table = make_table(
            "stg_customer",
            ["customer_id", "name"],
            groups=[BusinessKeyGroup(columns=["customer_id"], business_concept="Customer")],
            hashdiffs=[SelectAllHashdiff(name="hd_customer_sat", business_concept="Customer")],
        )

        rows = SatelliteCompiler(config).compile([table]).rows

        assert [r[COLUMN] for r in rows] == ["name"]
        assert rows[0][PARENT_KEY] == "hk_customer_h"
        assert rows[0][PARENT] == "H_customer"

    def test_explicit_hashkey_wins(self, config, make_table):
        table = customer(make_table, SelectAllHashdiff(
            name="hd_customer_sat", business_concept="Customer", hashkey_name="hk_client_h"))

        rows = SatelliteCompiler(config).compile([table]).rows

        assert {r[PARENT_KEY] for r in rows} == {"hk_client_h"}
        assert {r[PARENT] for r in rows} == {"H_client"}

    def test_unresolved_hashkey_is_rejected(self, config, make_table):
        table = customer(make_table, SelectAllHashdiff(name="hd_product_sat", business_concept="Product"))
        compiler = SatelliteCompiler(config)

        assert compiler.compile([table]).rows == []
        assert compiler.omissions[0].group == "hd_product_sat"

    def test_missing_concept_is_rejected(self, config, make_table):
        table = customer(make_table, SelectAllHashdiff(name="hd_customer_sat", hashkey_name="hk_customer_h"))
        compiler = SatelliteCompiler(config)

        assert compiler.compile([table]).rows == []
        assert compiler.omissions[0].reason == "hashdiff has no business concept"

    def test_empty_selection_is_rejected(self, config, make_table):
        table = customer(make_table, SelectExplicitHashdiff(
            name="hd_customer_sat", business_concept="Customer", included_columns=["missing"]))
        compiler = SatelliteCompiler(config)

        assert compiler.compile([table]).rows == []
        assert compiler.omissions[0].reason == "hashdiff selects no columns"


class TestImplicitSatellite:
    """Test cases for the single implicit satellite fallback."""

    def test_disabled_by_default(self, config, make_table):
        table = customer(make_table)
        assert SatelliteCompiler(config).compile([table]).rows == []

    def test_fallback_uses_first_hub(self, config, make_table):
        table = customer(make_table)

        rows = SatelliteCompiler(config, implicit_fallback=True).compile([table]).rows

        assert [r[COLUMN] for r in rows] == ["name", "email", "note"]
        assert rows[0][:2] == ["S_customer_h", "customer_h_sat"]
        assert rows[0][PARENT] == "H_customer_h"
        assert rows[0][PARENT_KEY] == "hk_customer_h"

    def test_fallback_from_config(self, config, make_table):
        config.set("satellite.implicit_fallback", True)
        assert len(SatelliteCompiler(config).compile([customer(make_table)]).rows) == 3

    def test_fallback_needs_a_hub(self, config, make_table):
        compiler = SatelliteCompiler(config, implicit_fallback=True)

        assert compiler.compile([make_table("lookup", ["code"])]).rows == []
        assert compiler.omissions[0].reason == "no hub to attach implicit satellite"

    def test_fallback_ignored_when_groups_exist(self, config, customer_table):
        rows = SatelliteCompiler(config, implicit_fallback=True).compile([customer_table]).rows
        assert {r[SATELLITE] for r in rows} == {"S_customer", "S_contact"}


class TestSatelliteEmpty:
    """Test cases for empty input."""

    def test_empty_input(self, config):
        assert SatelliteCompiler(config).compile([]).to_rows() == [STANDARD_SATELLITE_HEADER]
