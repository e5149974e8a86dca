# ============================================================================
# COLUMN MODEL
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core model - One column of a catalog table
# PURPOSE: Typed column definition and its CREATE TABLE fragment
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ColumnDescriptor, CatalogField
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Model

A ColumnDescriptor is built once per run from one row of the catalog
metadata query and is read-only afterwards.

Maps from: sys.tables / sys.columns / sys.types catalog query
(see repositories.catalog_repo.COLUMN_METADATA_SQL)
"""

import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from core.contracts import CanonicalType
from core.errors import UnrecognizedTypeName
from core.schema.ddl_utils import TABLE_CLOSE, SchemaUtils, TypeCatalog

logger = logging.getLogger(__name__)


class CatalogField:
    """Column names of the catalog metadata record."""
    TABLE_SCHEMA = "TABLE_SCHEMA"
    TABLE_NAME = "TABLE_NAME"
    COLUMN_NAME = "COLUMN_NAME"
    DATA_TYPE = "DATA_TYPE"
    DIGITS = "DIGITS"
    IS_NULLABLE = "IS_NULLABLE"
    IDENTITY_SET = "IDENTITY_SET"
    PRIMARY_KEY_ORDINAL = "PRIMARY_KEY_ORDINAL"
    IS_UNIQUE = "IS_UNIQUE"
    COLUMN_DEFAULT = "COLUMN_DEFAULT"


def parse_digits(raw: Any) -> Optional[int]:
    """
    Parse the DIGITS catalog field as an integer.

    Values that are not a plain integer ("", "MAX", "18, 2") are treated
    as absent rather than rejected.
    """
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        if str(raw).strip():
            logger.debug(f"Discarding non-integer digits value {raw!r}")
        return None


class ColumnDescriptor(BaseModel):
    """
    Full definition of one table column.

    Immutable. The qualified table name is derived from schema and table.
    """

    model_config = {"frozen": True}

    table_schema: str = Field(..., description="Owning schema (e.g. dbo)")
    table_name: str = Field(..., description="Owning table")
    column_name: str
    canonical_type: CanonicalType
    digits: Optional[int] = Field(
        default=None,
        description="Length / precision suffix rendered as (digits); None if absent"
    )
    nullable: bool = True
    identity_clause: str = Field(default="", description="IDENTITY(seed,increment) or empty")
    primary_key_ordinal: Optional[int] = Field(default=None, ge=1)
    is_unique: bool = False
    default_expression: str = ""

    @field_validator("canonical_type", mode="before")
    @classmethod
    def _resolve_type_name(cls, value: Any) -> Any:
        # Accept any casing of the type name; unknown names raise UnrecognizedTypeName
        if isinstance(value, str) and not isinstance(value, CanonicalType):
            return TypeCatalog.resolve(value)
        return value

    @computed_field
    @property
    def qualified_name(self) -> str:
        """[schema].[table]"""
        return SchemaUtils.qualified_name(self.table_schema, self.table_name)

    @property
    def has_identity(self) -> bool:
        return self.identity_clause != ""

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ColumnDescriptor":
        """
        Build a descriptor from one catalog metadata record.

        Args:
            record: Mapping keyed by CatalogField names. SQL NULL is None.

        Returns:
            ColumnDescriptor

        Raises:
            UnrecognizedTypeName: If DATA_TYPE is not a supported type
        """
        schema = record[CatalogField.TABLE_SCHEMA]
        table = record[CatalogField.TABLE_NAME]
        column = record[CatalogField.COLUMN_NAME]

        try:
            canonical_type = TypeCatalog.resolve(record[CatalogField.DATA_TYPE])
        except UnrecognizedTypeName as e:
            raise UnrecognizedTypeName(
                e.type_name, column=f"{SchemaUtils.qualified_name(schema, table)}.[{column}]"
            ) from None

        pk_ordinal = record[CatalogField.PRIMARY_KEY_ORDINAL]

        return cls(
            table_schema=schema,
            table_name=table,
            column_name=column,
            canonical_type=canonical_type,
            digits=parse_digits(record[CatalogField.DIGITS]),
            nullable=record[CatalogField.IS_NULLABLE] == "YES",
            identity_clause=record[CatalogField.IDENTITY_SET] or "",
            primary_key_ordinal=int(pk_ordinal) if pk_ordinal is not None else None,
            is_unique=bool(record[CatalogField.IS_UNIQUE]),
            default_expression=record[CatalogField.COLUMN_DEFAULT] or "",
        )

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render_type(self) -> str:
        """[type] or [type](digits)"""
        rendered = SchemaUtils.bracket(self.canonical_type.value)
        if self.digits is not None:
            rendered += f"({self.digits})"
        return rendered

    def render_column(self, table_has_constraint: bool, is_last_column: bool) -> str:
        """
        Render this column's line of a CREATE TABLE statement.

        Args:
            table_has_constraint: True if any column of the table is part of
                a primary key or unique constraint (computed once per table)
            is_last_column: True for the table's final column

        Returns:
            "\\t[name] [type] [IDENTITY(..)] NULL|NOT NULL" followed by ",\\n",
            or by "\\n) ON [PRIMARY]\\n" when this line closes the table
        """
        parts = [SchemaUtils.bracket(self.column_name), self.render_type()]
        if self.has_identity:
            parts.append(self.identity_clause)
        parts.append("NULL" if self.nullable else "NOT NULL")
        line = "\t" + " ".join(parts)

        # No constraint block follows the last column, so it closes the table
        if is_last_column and not table_has_constraint:
            return f"{line}\n{TABLE_CLOSE}"
        return f"{line},\n"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["ColumnDescriptor", "CatalogField", "parse_digits"]
