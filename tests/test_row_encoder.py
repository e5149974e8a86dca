# ============================================================================
# ROW ENCODER TESTS
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Tests - INSERT literal encoding
# PURPOSE: Verify per-type literals, identity wrapping, and column order checks
# CREATED: 19 OCT 2026
# ============================================================================
"""
Row Encoder Tests

Run with:
    pytest tests/test_row_encoder.py -v
"""

from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID

import pytest

from core.config import reset_defaults
from core.errors import ColumnOrderMismatch
from core.models import ColumnDescriptor, TableDescriptor
from services.row_encoder import InMemoryRows, RowEncoder, cursor_column_names


def _column(name, canonical_type="int", **kwargs):
    return ColumnDescriptor(
        table_schema="dbo", table_name="T", column_name=name, canonical_type=canonical_type, **kwargs
    )


def _table(*columns):
    return TableDescriptor(columns=columns)


def _encode(canonical_type, value, digits=None, encoder=None):
    encoder = encoder or RowEncoder(datetime2_default_digits=7)
    return encoder.encoder_for(_column("c", canonical_type, digits=digits))(value)


# ============================================================================
# LITERALS
# ============================================================================


class TestLiterals:
    @pytest.mark.parametrize("canonical_type,value,expected", [
        ("int", 42, "42"),
        ("bigint", -9000000000, "-9000000000"),
        ("decimal", Decimal("12.50"), "12.50"),
        ("float", 1.5, "1.5"),
        ("money", Decimal("3.1400"), "3.1400"),
        ("uniqueidentifier", UUID("12345678-1234-5678-1234-567812345678"),
         "12345678-1234-5678-1234-567812345678"),
        ("nvarchar", "x", "N'x'"),
        ("varchar", "abc", "N'abc'"),
        ("char", "A", "N'A'"),
        ("ntext", "", "N''"),
        ("date", date(2024, 1, 2), "N'2024-01-02'"),
        ("time", time(13, 45, 10), "N'13:45:10'"),
    ])
    def test_literal(self, canonical_type, value, expected):
        assert _encode(canonical_type, value) == expected

    @pytest.mark.parametrize("canonical_type", ["int", "nvarchar", "datetime2", "bit", "date", "varbinary"])
    def test_null_is_unquoted(self, canonical_type):
        assert _encode(canonical_type, None) == "NULL"

    @pytest.mark.parametrize("value,expected", [(True, "1"), (False, "0"), (1, "1"), (0, "0")])
    def test_bit(self, value, expected):
        assert _encode("bit", value) == expected

    def test_quotes_doubled(self):
        assert _encode("nvarchar", "it's") == "N'it''s'"

    def test_binary_as_hex(self):
        assert _encode("varbinary", b"\x01\xab\xff") == "0x01ABFF"
        assert _encode("binary", bytearray(b"\x00")) == "0x00"

    def test_datetime_millisecond_precision(self):
        value = datetime(2024, 3, 5, 8, 9, 10, 123456)
        assert _encode("datetime", value) == "N'2024-03-05 08:09:10.123'"
        assert _encode("smalldatetime", datetime(2024, 3, 5, 8, 9)) == "N'2024-03-05 08:09:00.000'"


class TestDatetime2:
    VALUE = datetime(2024, 3, 5, 8, 9, 10, 123456)

    def test_scale_three(self):
        assert _encode("datetime2", self.VALUE, digits=3) == (
            "CAST(N'2024-03-05T08:09:10.123' AS DateTime2)"
        )

    def test_scale_seven_pads_with_zero(self):
        assert _encode("datetime2", self.VALUE, digits=7) == (
            "CAST(N'2024-03-05T08:09:10.1234560' AS DateTime2)"
        )

    def test_default_scale_used_without_digits(self):
        encoder = RowEncoder(datetime2_default_digits=2)
        assert _encode("datetime2", self.VALUE, encoder=encoder) == (
            "CAST(N'2024-03-05T08:09:10.12' AS DateTime2)"
        )

    def test_default_scale_from_environment(self, monkeypatch):
        monkeypatch.setenv("SCRIPT_DATETIME2_DIGITS", "4")
        reset_defaults()
        try:
            assert RowEncoder().datetime2_default_digits == 4
        finally:
            monkeypatch.delenv("SCRIPT_DATETIME2_DIGITS")
            reset_defaults()

    def test_default_scale_is_seven(self):
        reset_defaults()
        assert RowEncoder().datetime2_default_digits == 7

    def test_scale_zero_keeps_separator(self):
        assert RowEncoder.format_datetime2(self.VALUE, 0) == "2024-03-05T08:09:10."

    def test_fraction_has_exact_digit_count(self):
        for digits in range(8):
            text = RowEncoder.format_datetime2(datetime(2024, 1, 1), digits)
            assert len(text.split(".")[1]) == digits


# ============================================================================
# INSERT BLOCK
# ============================================================================


class TestEncodeInserts:
    def test_identity_table(self):
        table = _table(
            _column("id", identity_clause="IDENTITY(1,1)", primary_key_ordinal=1, nullable=False),
            _column("name", "nvarchar", digits=50, nullable=False),
        )
        rows = InMemoryRows(["id", "name"], [(1, "x")])

        assert RowEncoder().encode_inserts(table, rows) == (
            "SET IDENTITY_INSERT [dbo].[T] ON\n"
            "\n"
            "INSERT [dbo].[T] ([id], [name]) VALUES (1, N'x')\n"
            "SET IDENTITY_INSERT [dbo].[T] OFF\n"
            "GO"
        )

    def test_identity_table_without_rows(self):
        table = _table(_column("id", identity_clause="IDENTITY(1,1)"))
        assert RowEncoder().encode_inserts(table, InMemoryRows(["id"])) == (
            "SET IDENTITY_INSERT [dbo].[T] ON\n"
            "\n"
            "SET IDENTITY_INSERT [dbo].[T] OFF\n"
            "GO"
        )

    def test_plain_table(self):
        table = _table(_column("code", "char", digits=2), _column("flag", "bit"))
        rows = InMemoryRows(["code", "flag"], [("AB", True), (None, None)])

        assert RowEncoder().encode_inserts(table, rows) == (
            "INSERT [dbo].[T] ([code], [flag]) VALUES (N'AB', 1)\n"
            "INSERT [dbo].[T] ([code], [flag]) VALUES (NULL, NULL)\n"
            "GO"
        )

    def test_plain_table_without_rows(self):
        table = _table(_column("a"))
        assert RowEncoder().encode_inserts(table, InMemoryRows(["a"])) == "GO"

    def test_one_insert_per_row_in_order(self):
        table = _table(_column("a"))
        rows = InMemoryRows(["a"], [(3,), (1,), (2,)])
        lines = RowEncoder().encode_inserts(table, rows).split("\n")
        assert lines == [
            "INSERT [dbo].[T] ([a]) VALUES (3)",
            "INSERT [dbo].[T] ([a]) VALUES (1)",
            "INSERT [dbo].[T] ([a]) VALUES (2)",
            "GO",
        ]


class TestColumnOrder:
    def test_swapped_columns_rejected(self):
        table = _table(_column("a"), _column("b"))
        with pytest.raises(ColumnOrderMismatch) as exc_info:
            RowEncoder().encode_inserts(table, InMemoryRows(["b", "a"], [(1, 2)]))

        error = exc_info.value
        assert error.table == "[dbo].[T]"
        assert error.expected == ["a", "b"]
        assert error.actual == ["b", "a"]
        assert "Column order of [dbo].[T] does not match" in str(error)

    def test_extra_cursor_column_rejected(self):
        table = _table(_column("a"))
        with pytest.raises(ColumnOrderMismatch):
            RowEncoder.check_column_order(table, InMemoryRows(["a", "b"]))

    def test_matching_columns_pass(self):
        table = _table(_column("a"), _column("b"))
        RowEncoder.check_column_order(table, InMemoryRows(["a", "b"]))


class TestInMemoryRows:
    def test_description_and_close(self):
        rows = InMemoryRows(["a", "b"], [(1, 2)])
        assert cursor_column_names(rows) == ["a", "b"]
        assert list(rows) == [(1, 2)]
        assert not rows.closed
        rows.close()
        assert rows.closed
