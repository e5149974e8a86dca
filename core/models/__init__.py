# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Model exports
# PURPOSE: Central export point for column, table, and selection models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Catalog metadata flows through these models:
    catalog record -> ColumnDescriptor -> TableDescriptor (group_tables)
    SelectionPolicy picks the TableDescriptors a run acts on.
"""

from core.models.column import ColumnDescriptor, CatalogField
from core.models.table import TableDescriptor, group_tables
from core.models.selection import SelectionPolicy

__all__ = [
    # Column
    "ColumnDescriptor",
    "CatalogField",
    # Table
    "TableDescriptor",
    "group_tables",
    # Selection
    "SelectionPolicy",
]
