# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for literal encoding and script output
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for script rendering and output.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ScriptDefaults:
    """
    Defaults for script rendering.

    Controls INSERT literal precision and the output file encoding.
    """
    # Fractional-second digits for datetime2 columns with no scale in the catalog
    datetime2_default_digits: int = 7

    # Output file encoding
    output_encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> "ScriptDefaults":
        """Create from environment variables."""
        return cls(
            datetime2_default_digits=int(os.getenv("SCRIPT_DATETIME2_DIGITS", 7)),
            output_encoding=os.getenv("SCRIPT_OUTPUT_ENCODING", "utf-8"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    script: ScriptDefaults = field(default_factory=ScriptDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(script=ScriptDefaults.from_env())


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ScriptDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
