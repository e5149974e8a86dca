# ============================================================================
# TABLE MODEL
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core model - Ordered columns of one table
# PURPOSE: Produce the DROP TABLE and CREATE TABLE script fragments
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: TableDescriptor, group_tables
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Model

A TableDescriptor groups the ColumnDescriptors of one table in catalog
ordinal order. Column order is never changed after construction.

The creation timestamp is captured once and only appears in the
"Script Date" comment of the generated fragments.

Terminator rule for CREATE TABLE:
    has_constraint is computed once per table and passed into every
    column render. Without constraints the last column line closes the
    table; with constraints the constraint blocks close it. Exactly one
    of the two paths emits ") ON [PRIMARY]".
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from pydantic import BaseModel, Field, computed_field, model_validator

from core.models.column import ColumnDescriptor
from core.schema.ddl_utils import (
    BATCH_TERMINATOR,
    CREATE_TABLE_TEMPLATE,
    DROP_TABLE_TEMPLATE,
    SCRIPT_DATE_FORMAT,
    TABLE_CLOSE,
    ConstraintBuilder,
)

logger = logging.getLogger(__name__)


class TableDescriptor(BaseModel):
    """
    One table and its columns.

    Never empty: a table without columns cannot be constructed.
    """

    model_config = {"frozen": True}

    columns: Tuple[ColumnDescriptor, ...] = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def _single_table(self) -> "TableDescriptor":
        qualified = {c.qualified_name for c in self.columns}
        if len(qualified) != 1:
            raise ValueError(f"Columns belong to more than one table: {sorted(qualified)}")
        return self

    @computed_field
    @property
    def table_name(self) -> str:
        return self.columns[0].table_name

    @computed_field
    @property
    def qualified_name(self) -> str:
        return self.columns[0].qualified_name

    @property
    def column_names(self) -> List[str]:
        return [c.column_name for c in self.columns]

    @property
    def has_primary_key(self) -> bool:
        return any(c.primary_key_ordinal is not None for c in self.columns)

    @property
    def has_unique(self) -> bool:
        return any(c.is_unique for c in self.columns)

    @property
    def has_constraint(self) -> bool:
        """True if a PRIMARY KEY or UNIQUE block follows the column lines."""
        return self.has_primary_key or self.has_unique

    @property
    def has_identity(self) -> bool:
        return any(c.has_identity for c in self.columns)

    @property
    def script_date(self) -> str:
        return self.created_at.strftime(SCRIPT_DATE_FORMAT)

    # =========================================================================
    # DROP
    # =========================================================================

    def render_drop(self) -> str:
        """Guarded DROP TABLE followed by GO."""
        return DROP_TABLE_TEMPLATE.format(table=self.qualified_name, date=self.script_date)

    # =========================================================================
    # CREATE
    # =========================================================================

    def primary_key_columns(self) -> List[str]:
        """Primary key column names ordered by key ordinal."""
        keyed = [c for c in self.columns if c.primary_key_ordinal is not None]
        return [c.column_name for c in sorted(keyed, key=lambda c: c.primary_key_ordinal)]

    def unique_columns(self) -> List[str]:
        """Unique column names in table column order."""
        return [c.column_name for c in self.columns if c.is_unique]

    def render_constraints(self) -> str:
        """
        Constraint blocks plus the table-closing line.

        PRIMARY KEY comes before UNIQUE. Returns "" if the table has
        neither, because the last column line already closed the table.
        """
        blocks = []
        if self.has_primary_key:
            blocks.append(ConstraintBuilder.primary_key(self.table_name, self.primary_key_columns()))
        if self.has_unique:
            blocks.append(ConstraintBuilder.unique(self.table_name, self.unique_columns()))

        if not blocks:
            return ""
        return ",\n".join(blocks) + "\n" + TABLE_CLOSE

    def render_create(self) -> str:
        """Session settings, CREATE TABLE with columns and constraints, GO."""
        has_constraint = self.has_constraint
        last_index = len(self.columns) - 1

        parts = [CREATE_TABLE_TEMPLATE.format(table=self.qualified_name, date=self.script_date)]
        parts.extend(
            column.render_column(has_constraint, index == last_index)
            for index, column in enumerate(self.columns)
        )
        if has_constraint:
            parts.append(self.render_constraints())
        parts.append(BATCH_TERMINATOR)

        return "".join(parts)


# ============================================================================
# GROUPING
# ============================================================================

def group_tables(columns: Iterable[ColumnDescriptor]) -> List[TableDescriptor]:
    """
    Group catalog columns into tables.

    Tables keep the order in which they are first seen; columns keep
    their source order within a table.

    Args:
        columns: ColumnDescriptors in catalog order

    Returns:
        One TableDescriptor per (schema, table)
    """
    grouped: Dict[Tuple[str, str], List[ColumnDescriptor]] = {}
    for column in columns:
        grouped.setdefault((column.table_schema, column.table_name), []).append(column)

    tables = [TableDescriptor(columns=tuple(table_columns)) for table_columns in grouped.values()]

    logger.debug(f"Grouped catalog columns into {len(tables)} tables")
    return tables


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["TableDescriptor", "group_tables"]
