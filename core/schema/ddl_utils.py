# ============================================================================
# DDL UTILITIES
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core - DRY utilities for T-SQL script generation
# PURPOSE: Type catalog, script templates, and constraint builder
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: TYPE_MAP, TypeCatalog, ConstraintBuilder, SchemaUtils
# DEPENDENCIES: none (stdlib only)
# ============================================================================
"""
DDL Utilities - Shared T-SQL Generation Patterns.

Everything here is a pure function of its arguments and returns plain
text in the layout SQL Server Management Studio uses for "Generate
Scripts" output.

Usage:
    from core.schema.ddl_utils import TypeCatalog, ConstraintBuilder

    TypeCatalog.resolve("NVarChar")         # CanonicalType.NVARCHAR
    ConstraintBuilder.primary_key("T", ["id"])
"""

from types import MappingProxyType
from typing import Mapping, Sequence

from core.contracts import CanonicalType
from core.errors import UnrecognizedTypeName


# ============================================================================
# TYPE MAPPING
# ============================================================================

# Lower-case type name -> canonical type. Read-only, built once at import.
TYPE_MAP: Mapping[str, CanonicalType] = MappingProxyType(
    {member.value: member for member in CanonicalType}
)


class TypeCatalog:
    """
    Resolve SQL Server type names to CanonicalType.

    All methods are static; the lookup table is the module-level TYPE_MAP.
    """

    @staticmethod
    def resolve(name: str) -> CanonicalType:
        """
        Case-insensitive exact match of a type name.

        Args:
            name: Type name as reported by sys.types (e.g. "nvarchar")

        Returns:
            CanonicalType member

        Raises:
            UnrecognizedTypeName: If the name is not a supported type
        """
        try:
            return TYPE_MAP[name.lower()]
        except (KeyError, AttributeError):
            raise UnrecognizedTypeName(str(name)) from None

    @staticmethod
    def supported_names() -> Sequence[str]:
        """All type names the catalog accepts, in enum order."""
        return tuple(TYPE_MAP)


# ============================================================================
# SCRIPT TEMPLATES
# ============================================================================

BATCH_TERMINATOR = "GO"

SCRIPT_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

OBJECT_HEADER = "/****** Object:  Table {table}    Script Date: {date} ******/\n"

DROP_TABLE_TEMPLATE = (
    OBJECT_HEADER
    + "IF EXISTS (SELECT * FROM sys.objects WHERE object_id = OBJECT_ID(N'{table}') AND type in (N'U'))\n"
    + "DROP TABLE {table}\n"
    + BATCH_TERMINATOR
)

CREATE_TABLE_TEMPLATE = (
    OBJECT_HEADER
    + "SET ANSI_NULLS ON\n"
    + BATCH_TERMINATOR + "\n"
    + "SET QUOTED_IDENTIFIER ON\n"
    + BATCH_TERMINATOR + "\n"
    + "CREATE TABLE {table}(\n"
)

FILEGROUP_CLAUSE = "ON [PRIMARY]"

TABLE_CLOSE = f") {FILEGROUP_CLAUSE}\n"

INDEX_OPTIONS = (
    "WITH (PAD_INDEX = OFF, STATISTICS_NORECOMPUTE = OFF, IGNORE_DUP_KEY = OFF, "
    "ALLOW_ROW_LOCKS = ON, ALLOW_PAGE_LOCKS = ON, OPTIMIZE_FOR_SEQUENTIAL_KEY = OFF)"
)

INSERT_TEMPLATE = "INSERT {table} ({columns}) VALUES ({values})"

IDENTITY_INSERT_TEMPLATE = "SET IDENTITY_INSERT {table} {state}"

USE_DATABASE_TEMPLATE = "USE [{database}]\n" + BATCH_TERMINATOR + "\n"


# ============================================================================
# CONSTRAINT BUILDER
# ============================================================================

class ConstraintBuilder:
    """
    Builder for table-level constraint blocks inside CREATE TABLE.

    A block has no trailing newline so the caller can join several blocks
    with "," before closing the table once.
    """

    PRIMARY_KEY = "PRIMARY KEY CLUSTERED"
    UNIQUE = "UNIQUE NONCLUSTERED"

    @staticmethod
    def block(name: str, kind: str, columns: Sequence[str]) -> str:
        """
        Render one named constraint block.

        Args:
            name: Constraint name (e.g. PK_Orders)
            kind: ConstraintBuilder.PRIMARY_KEY or ConstraintBuilder.UNIQUE
            columns: Column names in key order

        Returns:
            Block text ending with the index options and filegroup
        """
        column_lines = ",\n".join(f"\t{SchemaUtils.bracket(c)} ASC" for c in columns)
        return (
            f" CONSTRAINT {SchemaUtils.bracket(name)} {kind}\n"
            f"(\n"
            f"{column_lines}\n"
            f"){INDEX_OPTIONS} {FILEGROUP_CLAUSE}"
        )

    @staticmethod
    def primary_key(table_name: str, columns: Sequence[str]) -> str:
        """PRIMARY KEY CLUSTERED block named PK_<table>."""
        return ConstraintBuilder.block(f"PK_{table_name}", ConstraintBuilder.PRIMARY_KEY, columns)

    @staticmethod
    def unique(table_name: str, columns: Sequence[str]) -> str:
        """UNIQUE NONCLUSTERED block named UK_<table>."""
        return ConstraintBuilder.block(f"UK_{table_name}", ConstraintBuilder.UNIQUE, columns)


# ============================================================================
# SCHEMA UTILITIES
# ============================================================================

class SchemaUtils:
    """Identifier and literal helpers."""

    @staticmethod
    def bracket(identifier: str) -> str:
        """Wrap an identifier in square brackets: name -> [name], a]b -> [a]]b]."""
        return "[" + identifier.replace("]", "]]") + "]"

    @staticmethod
    def qualified_name(schema: str, table: str) -> str:
        """[schema].[table]"""
        return f"{SchemaUtils.bracket(schema)}.{SchemaUtils.bracket(table)}"

    @staticmethod
    def unicode_literal(text: str) -> str:
        """N'...' literal with embedded quotes doubled."""
        return "N'" + text.replace("'", "''") + "'"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TYPE_MAP",
    "TypeCatalog",
    "ConstraintBuilder",
    "SchemaUtils",
    "BATCH_TERMINATOR",
    "SCRIPT_DATE_FORMAT",
    "DROP_TABLE_TEMPLATE",
    "CREATE_TABLE_TEMPLATE",
    "TABLE_CLOSE",
    "INSERT_TEMPLATE",
    "IDENTITY_INSERT_TEMPLATE",
    "USE_DATABASE_TEMPLATE",
]
