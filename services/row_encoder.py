# ============================================================================
# ROW ENCODER
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Service - INSERT script generation
# PURPOSE: Type-aware literal encoding of table rows into INSERT statements
# CREATED: 19 OCT 2026
# EXPORTS: RowEncoder, RowCursor, InMemoryRows
# DEPENDENCIES: core.models
# ============================================================================
"""
Row Encoder

Turns the rows of one table into an INSERT block:

    SET IDENTITY_INSERT [dbo].[T] ON        (only if a column has IDENTITY)
    <blank line>
    INSERT [dbo].[T] ([id], [name]) VALUES (1, N'x')
    ...
    SET IDENTITY_INSERT [dbo].[T] OFF
    GO

Rows come from a DB-API style cursor: ``description`` names the columns
and iterating the cursor yields row tuples. The cursor's column order is
checked against the TableDescriptor before any row is read.

Literal encoding by CanonicalType:
    datetime2          CAST(N'yyyy-mm-ddThh:mm:ss.<digits f>' AS DateTime2)
    temporal / text    N'<value>'
    bit                1 / 0
    everything else    the value's text form
    SQL NULL           NULL (every type)
"""

import logging
from datetime import date, datetime, time
from typing import Any, Callable, Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple

from core.config import get_defaults
from core.contracts import CanonicalType
from core.errors import ColumnOrderMismatch
from core.models import ColumnDescriptor, TableDescriptor
from core.schema.ddl_utils import (
    BATCH_TERMINATOR,
    IDENTITY_INSERT_TEMPLATE,
    INSERT_TEMPLATE,
    SchemaUtils,
)

logger = logging.getLogger(__name__)

NULL_LITERAL = "NULL"

LiteralEncoder = Callable[[Any], str]


class RowCursor(Protocol):
    """The part of a DB-API cursor the encoder reads."""

    description: Optional[Sequence[Sequence[Any]]]

    def __iter__(self) -> Iterator[Sequence[Any]]: ...


class InMemoryRows:
    """
    RowCursor over rows already held in memory.

    Example:
        rows = InMemoryRows(["id", "name"], [(1, "x"), (2, "y")])
    """

    def __init__(self, column_names: Sequence[str], rows: Iterable[Sequence[Any]] = ()):
        self.description: List[Tuple[Any, ...]] = [
            (name, None, None, None, None, None, None) for name in column_names
        ]
        self._rows = list(rows)
        self.closed = False

    def __iter__(self) -> Iterator[Sequence[Any]]:
        return iter(self._rows)

    def close(self) -> None:
        self.closed = True


def cursor_column_names(rows: RowCursor) -> List[str]:
    """Column names from a cursor's description."""
    return [column[0] for column in (rows.description or [])]


class RowEncoder:
    """
    Build INSERT blocks for tables.

    One encoder per column is chosen once per table from its CanonicalType,
    then applied to every row.
    """

    def __init__(self, datetime2_default_digits: Optional[int] = None):
        """
        Args:
            datetime2_default_digits: Fractional-second digits for datetime2
                columns without a scale (default from ScriptDefaults)
        """
        if datetime2_default_digits is None:
            datetime2_default_digits = get_defaults().script.datetime2_default_digits
        self.datetime2_default_digits = datetime2_default_digits

    # =========================================================================
    # LITERAL ENCODERS
    # =========================================================================

    def encoder_for(self, column: ColumnDescriptor) -> LiteralEncoder:
        """Pick the literal encoder for a column."""
        canonical_type = column.canonical_type

        if canonical_type == CanonicalType.DATETIME2:
            digits = column.digits if column.digits is not None else self.datetime2_default_digits
            return lambda value: self._encode_datetime2(value, digits)
        if canonical_type == CanonicalType.BIT:
            return self._encode_bit
        if canonical_type.is_quoted():
            return lambda value: self._encode_quoted(value, canonical_type)
        return self._encode_plain

    @staticmethod
    def format_datetime2(value: Any, digits: int) -> str:
        """
        yyyy-mm-ddThh:mm:ss. followed by exactly ``digits`` fraction digits.

        Python datetimes carry microseconds; a seventh digit is always 0.
        """
        if not isinstance(value, datetime):
            return str(value)
        fraction = f"{value.microsecond:06d}".ljust(max(digits, 6), "0")[:digits]
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + fraction

    def _encode_datetime2(self, value: Any, digits: int) -> str:
        if value is None:
            return NULL_LITERAL
        return f"CAST({SchemaUtils.unicode_literal(self.format_datetime2(value, digits))} AS DateTime2)"

    @staticmethod
    def _encode_bit(value: Any) -> str:
        if value is None:
            return NULL_LITERAL
        return "1" if value else "0"

    @staticmethod
    def _encode_quoted(value: Any, canonical_type: CanonicalType) -> str:
        if value is None:
            return NULL_LITERAL
        return SchemaUtils.unicode_literal(RowEncoder.text_of(value, canonical_type))

    @staticmethod
    def _encode_plain(value: Any) -> str:
        if value is None:
            return NULL_LITERAL
        if isinstance(value, (bytes, bytearray, memoryview)):
            return "0x" + bytes(value).hex().upper()
        return str(value)

    @staticmethod
    def text_of(value: Any, canonical_type: CanonicalType) -> str:
        """Text form of a value inside an N'...' literal."""
        if isinstance(value, datetime):
            # datetime / smalldatetime reject more than 3 fraction digits
            if canonical_type in (CanonicalType.DATETIME, CanonicalType.SMALLDATETIME):
                return value.isoformat(sep=" ", timespec="milliseconds")
            return value.isoformat(sep=" ")
        if isinstance(value, (date, time)):
            return value.isoformat()
        return str(value)

    # =========================================================================
    # INSERT BLOCK
    # =========================================================================

    @staticmethod
    def check_column_order(table: TableDescriptor, rows: RowCursor) -> None:
        """
        Verify the cursor's columns equal the table's, position for position.

        Raises:
            ColumnOrderMismatch: On any difference in names, order, or count
        """
        expected = table.column_names
        actual = cursor_column_names(rows)
        if expected != actual:
            raise ColumnOrderMismatch(table.qualified_name, expected, actual)

    def encode_inserts(self, table: TableDescriptor, rows: RowCursor) -> str:
        """
        Render the INSERT block for one table.

        Args:
            table: Table the rows belong to
            rows: Cursor over the table's rows, drained completely

        Returns:
            Lines joined by newline, always ending with GO

        Raises:
            ColumnOrderMismatch: If the cursor's columns differ from the table's
        """
        self.check_column_order(table, rows)

        encoders = [self.encoder_for(column) for column in table.columns]
        column_list = ", ".join(SchemaUtils.bracket(name) for name in table.column_names)

        lines: List[str] = []
        if table.has_identity:
            lines.append(IDENTITY_INSERT_TEMPLATE.format(table=table.qualified_name, state="ON"))
            lines.append("")

        row_count = 0
        for row in rows:
            values = ", ".join(encode(value) for encode, value in zip(encoders, row))
            lines.append(INSERT_TEMPLATE.format(
                table=table.qualified_name,
                columns=column_list,
                values=values,
            ))
            row_count += 1

        if table.has_identity:
            lines.append(IDENTITY_INSERT_TEMPLATE.format(table=table.qualified_name, state="OFF"))

        lines.append(BATCH_TERMINATOR)

        logger.debug(f"Encoded {row_count} rows for {table.qualified_name}")
        return "\n".join(lines)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["RowEncoder", "RowCursor", "InMemoryRows", "cursor_column_names"]
