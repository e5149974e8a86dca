# ============================================================================
# BASE REPOSITORY - ERROR HANDLING PATTERNS
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Infrastructure - Base repository patterns
# PURPOSE: Common error handling and logging for catalog repositories
# CREATED: 19 OCT 2026
# ============================================================================
"""
Base Repository Patterns

Abstract base class that provides common infrastructure for repositories:
- Consistent error handling with a context manager
- Standardized logging

Driver errors are logged with the operation that failed and re-raised as
RepositoryError. Script generation errors (ScriptGenerationError) pass
through unchanged so the caller sees the underlying failure.
"""

import logging
from abc import ABC
from contextlib import contextmanager
from typing import Optional

from core.errors import ScriptGenerationError

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, operation: str = None, entity_id: str = None):
        self.operation = operation
        self.entity_id = entity_id
        super().__init__(message)


class BaseRepository(ABC):
    """
    Abstract base repository with common patterns.

    Subclasses implement storage-specific operations.
    """

    def __init__(self):
        """Initialize base repository."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.debug(f"{self.__class__.__name__} initialized")

    @contextmanager
    def _error_context(self, operation: str, entity_id: Optional[str] = None):
        """
        Context manager for consistent error handling.

        Args:
            operation: Human-readable description of the operation
            entity_id: Optional entity (table) for context

        Example:
            with self._error_context("row query", table.qualified_name):
                cursor.execute(sql)
        """
        try:
            yield
        except (RepositoryError, ScriptGenerationError):
            # Already has context, just re-raise
            raise
        except Exception as e:
            error_msg = f"{operation} failed"
            if entity_id:
                error_msg += f" for {entity_id}"
            error_msg += f": {e}"
            self.logger.error(error_msg)
            raise RepositoryError(error_msg, operation=operation, entity_id=entity_id) from e


__all__ = ["RepositoryError", "BaseRepository"]
