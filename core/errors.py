# ============================================================================
# SCRIPT GENERATION ERRORS
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Foundation - Exception hierarchy for the generator core
# PURPOSE: Typed failures raised while building or rendering scripts
# CREATED: 19 OCT 2026
# ============================================================================
"""
Script Generation Errors

All core failures derive from ScriptGenerationError so callers can catch
one type. Each subclass keeps the offending values as attributes.

Fatal:
    UnrecognizedTypeName, ColumnOrderMismatch, ConfigurationError
    (InvalidSelectionPolicy)

Non-fatal:
    EmptyTargetSet - raised by a generation pass and handled by the
    ScriptAssembler, which logs it and skips the pass.
"""

from typing import Optional, Sequence


class ScriptGenerationError(Exception):
    """Base exception for script generation failures."""


class UnrecognizedTypeName(ScriptGenerationError):
    """Raised when a catalog type name is not a supported SQL Server type."""

    def __init__(self, type_name: str, column: Optional[str] = None):
        self.type_name = type_name
        self.column = column
        message = f"Unrecognized SQL Server data type [{type_name}]"
        if column:
            message += f" for column {column}"
        super().__init__(message)


class ColumnOrderMismatch(ScriptGenerationError):
    """Raised when a row cursor's columns differ from the table descriptor's."""

    def __init__(self, table: str, expected: Sequence[str], actual: Sequence[str]):
        self.table = table
        self.expected = list(expected)
        self.actual = list(actual)
        super().__init__(
            f"Column order of {table} does not match the row cursor. "
            f"Table columns [{','.join(self.expected)}] "
            f"Cursor columns [{','.join(self.actual)}]"
        )


class ConfigurationError(ScriptGenerationError):
    """Raised when run or connection options are missing or inconsistent."""


class InvalidSelectionPolicy(ConfigurationError):
    """Raised when include/exclude or run-mode options contradict each other."""


class EmptyTargetSet(ScriptGenerationError):
    """Raised by a generation pass that has no tables to act on."""

    def __init__(self, pass_name: str):
        self.pass_name = pass_name
        super().__init__(f"No target tables, skipping {pass_name} script generation")


__all__ = [
    "ScriptGenerationError",
    "UnrecognizedTypeName",
    "ColumnOrderMismatch",
    "ConfigurationError",
    "InvalidSelectionPolicy",
    "EmptyTargetSet",
]
