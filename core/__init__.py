# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors, and models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.contracts import CanonicalType, DropCreate, SchemeData, TargetTableType
from core.errors import (
    ScriptGenerationError,
    UnrecognizedTypeName,
    ColumnOrderMismatch,
    ConfigurationError,
    InvalidSelectionPolicy,
    EmptyTargetSet,
)
from core.models import ColumnDescriptor, TableDescriptor, SelectionPolicy, group_tables
from core.schema import TypeCatalog

__all__ = [
    # Enums
    "CanonicalType",
    "DropCreate",
    "SchemeData",
    "TargetTableType",
    # Errors
    "ScriptGenerationError",
    "UnrecognizedTypeName",
    "ColumnOrderMismatch",
    "ConfigurationError",
    "InvalidSelectionPolicy",
    "EmptyTargetSet",
    # Models
    "ColumnDescriptor",
    "TableDescriptor",
    "SelectionPolicy",
    "group_tables",
    # Schema
    "TypeCatalog",
]
