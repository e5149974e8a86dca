# ============================================================================
# DATABASE CONNECTION
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core - SQL Server connection management
# PURPOSE: Build ODBC connection strings and open pyodbc connections
# CREATED: 19 OCT 2026
# ============================================================================
"""
Database Connection

Opens one synchronous SQL Server connection per run using pyodbc.

Supports two authentication methods:
1. Windows integrated auth - trusted_connection / MSSQL_TRUSTED_CONNECTION=true
2. SQL Server auth - user + password (-U/-P or MSSQL_USER/MSSQL_PASSWORD)

Usage:
    from repositories.database import ConnectionSettings, connect

    settings = ConnectionSettings.from_env()
    with connect(settings) as conn:
        cursor = conn.cursor()
"""

import logging
import os
import struct
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Iterator

from core.errors import ConfigurationError
from repositories.base import RepositoryError

logger = logging.getLogger(__name__)

DEFAULT_DRIVER = "ODBC Driver 18 for SQL Server"

# ODBC type code of DATETIMEOFFSET, which pyodbc does not convert on its own
SQL_SS_TIMESTAMPOFFSET = -155


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class ConnectionSettings:
    """
    SQL Server connection options.

    Command-line values override environment values via with_overrides().
    """
    server: str = ""
    database: str = ""
    user: str = ""
    password: str = ""
    encrypt: bool = False
    trusted_connection: bool = False
    driver: str = DEFAULT_DRIVER
    connect_timeout: int = 5

    @classmethod
    def from_env(cls) -> "ConnectionSettings":
        """Create from MSSQL_* environment variables."""
        return cls(
            server=os.environ.get("MSSQL_SERVER", ""),
            database=os.environ.get("MSSQL_DATABASE", ""),
            user=os.environ.get("MSSQL_USER", ""),
            password=os.environ.get("MSSQL_PASSWORD", ""),
            encrypt=_env_flag("MSSQL_ENCRYPT"),
            trusted_connection=_env_flag("MSSQL_TRUSTED_CONNECTION"),
            driver=os.environ.get("MSSQL_ODBC_DRIVER", DEFAULT_DRIVER),
            connect_timeout=int(os.environ.get("MSSQL_CONNECT_TIMEOUT", 5)),
        )

    def with_overrides(self, **overrides) -> "ConnectionSettings":
        """Copy with every override that is not None or False applied."""
        changes = {k: v for k, v in overrides.items() if v is not None and v is not False}
        return replace(self, **changes)

    def validate(self) -> None:
        """
        Check that a connection can be attempted.

        Raises:
            ConfigurationError: If server/database are missing, or SQL
                authentication is used without user and password
        """
        if not self.server:
            raise ConfigurationError("A server name (-S) is required")
        if not self.database:
            raise ConfigurationError("A database name (-d) is required")
        if not self.trusted_connection and (not self.user or not self.password):
            raise ConfigurationError(
                "Specify -U (user) and -P (password), or -E for Windows integrated authentication"
            )


def _odbc_value(value: str) -> str:
    """Brace-quote a connection string value if it contains special characters."""
    if any(ch in value for ch in ";{}=") or value != value.strip():
        return "{" + value.replace("}", "}}") + "}"
    return value


def get_connection_string(settings: ConnectionSettings) -> str:
    """
    Build the ODBC connection string.

    Args:
        settings: Connection options

    Returns:
        "DRIVER={...};SERVER=...;DATABASE=...;..." connection string
    """
    parts = [
        f"DRIVER={{{settings.driver}}}",
        f"SERVER={_odbc_value(settings.server)}",
        f"DATABASE={_odbc_value(settings.database)}",
    ]
    if settings.trusted_connection:
        parts.append("Trusted_Connection=yes")
    else:
        parts.append(f"UID={_odbc_value(settings.user)}")
        parts.append(f"PWD={_odbc_value(settings.password)}")
    parts.append(f"Encrypt={'yes' if settings.encrypt else 'no'}")

    return ";".join(parts) + ";"


def mask_connection_string(connection_string: str) -> str:
    """Hide the password of a connection string for logging."""
    masked = []
    for part in connection_string.split(";"):
        if part.upper().startswith("PWD="):
            part = "PWD=***"
        masked.append(part)
    return ";".join(masked)


def _handle_datetimeoffset(value: bytes) -> datetime:
    """Convert SQL_SS_TIMESTAMPOFFSET_STRUCT bytes into an aware datetime."""
    year, month, day, hour, minute, second, nanoseconds, tz_hour, tz_minute = struct.unpack(
        "<6hI2h", value
    )
    return datetime(
        year, month, day, hour, minute, second, nanoseconds // 1000,
        timezone(timedelta(hours=tz_hour, minutes=tz_minute)),
    )


@contextmanager
def connect(settings: ConnectionSettings) -> Iterator[Any]:
    """
    Open a SQL Server connection and close it on exit.

    Args:
        settings: Connection options

    Yields:
        pyodbc.Connection

    Raises:
        ConfigurationError: If the settings are incomplete
        RepositoryError: If the driver cannot connect
    """
    import pyodbc

    settings.validate()
    connection_string = get_connection_string(settings)
    logger.info(f"Connecting to SQL Server: {mask_connection_string(connection_string)}")

    try:
        connection = pyodbc.connect(connection_string, timeout=settings.connect_timeout)
    except pyodbc.Error as e:
        logger.error(f"Connection to {settings.server} failed: {e}")
        raise RepositoryError(f"Connection failed: {e}", operation="connect", entity_id=settings.server) from e

    connection.add_output_converter(SQL_SS_TIMESTAMPOFFSET, _handle_datetimeoffset)
    try:
        yield connection
    finally:
        connection.close()
        logger.info("Connection closed")


__all__ = [
    "ConnectionSettings",
    "get_connection_string",
    "mask_connection_string",
    "connect",
]
