# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core - Database access layer
# PURPOSE: SQL Server connection, catalog metadata, and table rows
# CREATED: 19 OCT 2026
# ============================================================================
"""
Repositories Module

Provides SQL Server access for the script generator.
Uses pyodbc with one synchronous connection per run.

Usage:
    from repositories import CatalogRepository, ConnectionSettings, connect

    with connect(ConnectionSettings.from_env()) as conn:
        tables = CatalogRepository(conn).fetch_tables()
"""

from .base import RepositoryError, BaseRepository
from .database import ConnectionSettings, connect, get_connection_string
from .catalog_repo import CatalogRepository

__all__ = [
    "RepositoryError",
    "BaseRepository",
    "ConnectionSettings",
    "connect",
    "get_connection_string",
    "CatalogRepository",
]
