# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Foundation - Core enums shared by every layer
# PURPOSE: Canonical SQL Server data types and run-mode enums
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: CanonicalType, DropCreate, SchemeData, TargetTableType
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the script generator.

These enums cross every boundary:
- Catalog (the DATA_TYPE column returned by sys.types)
- Models (ColumnDescriptor.canonical_type)
- Rendering (CREATE column types, INSERT literal encoding)
- Configuration (which script sections are produced)
"""

from enum import Enum


# ============================================================================
# DATA TYPES
# ============================================================================

class CanonicalType(str, Enum):
    """
    Closed set of SQL Server data types the generator understands.

    The value is the lower-case type name, which is also how the type is
    written inside a CREATE TABLE column definition (``[nvarchar](50)``).
    """
    BIGINT = "bigint"
    BINARY = "binary"
    BIT = "bit"
    CHAR = "char"
    DATE = "date"
    DATETIME = "datetime"
    DATETIME2 = "datetime2"
    DATETIMEOFFSET = "datetimeoffset"
    DECIMAL = "decimal"
    FLOAT = "float"
    IMAGE = "image"
    INT = "int"
    MONEY = "money"
    NCHAR = "nchar"
    NTEXT = "ntext"
    NVARCHAR = "nvarchar"
    REAL = "real"
    SMALLDATETIME = "smalldatetime"
    SMALLINT = "smallint"
    SMALLMONEY = "smallmoney"
    TEXT = "text"
    TIME = "time"
    TIMESTAMP = "timestamp"
    TINYINT = "tinyint"
    UNIQUEIDENTIFIER = "uniqueidentifier"
    VARBINARY = "varbinary"
    VARCHAR = "varchar"
    VARIANT = "variant"
    XML = "xml"

    def is_quoted(self) -> bool:
        """Check if INSERT literals of this type are written as N'...' text."""
        return self in _QUOTED_TYPES


# Temporal and character types are emitted as N'<value>' in INSERT scripts
_QUOTED_TYPES = frozenset({
    CanonicalType.DATE,
    CanonicalType.TIME,
    CanonicalType.DATETIMEOFFSET,
    CanonicalType.DATETIME,
    CanonicalType.DATETIME2,
    CanonicalType.SMALLDATETIME,
    CanonicalType.CHAR,
    CanonicalType.VARCHAR,
    CanonicalType.TEXT,
    CanonicalType.NCHAR,
    CanonicalType.NVARCHAR,
    CanonicalType.NTEXT,
})


# ============================================================================
# RUN MODES
# ============================================================================

class DropCreate(str, Enum):
    """Which DDL sections are produced."""
    DROP_AND_CREATE = "drop_and_create"
    DROP_ONLY = "drop_only"
    CREATE_ONLY = "create_only"


class SchemeData(str, Enum):
    """Whether schema (DDL), data (INSERT), or both are produced."""
    SCHEME_AND_DATA = "scheme_and_data"
    SCHEME_ONLY = "scheme_only"
    DATA_ONLY = "data_only"


class TargetTableType(str, Enum):
    """How the set of target tables is chosen."""
    ALL = "all"
    INCLUDE = "include"
    EXCLUDE = "exclude"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CanonicalType",
    "DropCreate",
    "SchemeData",
    "TargetTableType",
]
