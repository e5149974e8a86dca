# ============================================================================
# SCHEMA MODULE
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core - T-SQL script building blocks
# PURPOSE: Type catalog, templates, and constraint builder for script output
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.schema.ddl_utils import (
    TYPE_MAP,
    TypeCatalog,
    ConstraintBuilder,
    SchemaUtils,
)

__all__ = [
    # Type catalog
    "TYPE_MAP",
    "TypeCatalog",
    # Utilities
    "ConstraintBuilder",
    "SchemaUtils",
]
