# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core - Script generation layer
# PURPOSE: INSERT encoding and script document assembly
# CREATED: 19 OCT 2026
# ============================================================================
"""
Services Module

Script generation on top of the core models.
Services never talk to the database directly; rows arrive through a
RowSource supplied by the caller (normally CatalogRepository.open_rows).

Usage:
    from services import ScriptAssembler

    text = ScriptAssembler(run_config).assemble(tables, repo.open_rows)
"""

from .row_encoder import RowEncoder, InMemoryRows
from .script_service import ScriptAssembler, ScriptDocument

__all__ = [
    "RowEncoder",
    "InMemoryRows",
    "ScriptAssembler",
    "ScriptDocument",
]
