# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides rendering defaults and the per-run configuration.
"""

from core.config.defaults import (
    ScriptDefaults,
    get_defaults,
    reset_defaults,
)
from core.config.run_config import RunConfiguration

__all__ = [
    "ScriptDefaults",
    "get_defaults",
    "reset_defaults",
    "RunConfiguration",
]
