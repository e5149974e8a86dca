#!/usr/bin/env python
# ============================================================================
# MSSQL SCRIPT TOOL - COMMAND LINE ENTRY POINT
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core - CLI entry point
# PURPOSE: Script DROP / CREATE / INSERT statements from a SQL Server database
# CREATED: 19 OCT 2026
# USAGE:
#   python main.py -S localhost -d Sales -E --script-drop-create --schema-and-data
#   python main.py -S db01 -U sa -P secret -d Sales --script-create --schema-only -f out/sales.sql
# ============================================================================
"""
MSSQL Script Tool

Connects to SQL Server, reads the table catalog, and writes a T-SQL
script equivalent to Management Studio's "Generate Scripts" output.

Exit status is 0 on success and 1 if configuration, catalog access, or
script generation fails. Nothing is written on failure.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from __version__ import __version__
from core.config import RunConfiguration, get_defaults
from core.errors import ScriptGenerationError
from core.logging import ComponentType, configure_logging, get_logger
from repositories import CatalogRepository, ConnectionSettings, RepositoryError, connect
from services import ScriptAssembler

logger = get_logger("main", ComponentType.CLI)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mssql-script-tool",
        description="Generate DROP / CREATE / INSERT scripts for SQL Server tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mssql-script-tool -S localhost -d Sales -E --script-drop-create --schema-and-data
  mssql-script-tool -S db01 -U sa -P secret -d Sales --script-create --schema-only -f out/sales.sql
  mssql-script-tool -S db01 -d Sales -E --script-drop-create --data-only --include-objects Orders Customers

Environment Variables:
  MSSQL_SERVER, MSSQL_DATABASE, MSSQL_USER, MSSQL_PASSWORD
  MSSQL_ENCRYPT, MSSQL_TRUSTED_CONNECTION  (true/false)
  MSSQL_ODBC_DRIVER       ODBC driver name (default: ODBC Driver 18 for SQL Server)
  MSSQL_CONNECT_TIMEOUT   Login timeout in seconds (default: 5)
  LOG_LEVEL, LOG_FORMAT   Logging level and format (json)
        """
    )

    connection = parser.add_argument_group("connection")
    connection.add_argument("-S", dest="server", help="Server name")
    connection.add_argument("-U", dest="user", help="Login user name")
    connection.add_argument("-P", dest="password", help="Login password")
    connection.add_argument("-d", dest="database", help="Database name")
    connection.add_argument("-N", dest="encrypt", action="store_true", help="Encrypt the connection")
    connection.add_argument(
        "-E", dest="trusted_connection", action="store_true",
        help="Use Windows integrated authentication"
    )

    parser.add_argument("-f", dest="output_file", help="Output file path (default: stdout)")

    objects = parser.add_mutually_exclusive_group()
    objects.add_argument(
        "--include-objects", nargs="+", action="extend", default=[], metavar="TABLE",
        help="Script only these tables"
    )
    objects.add_argument(
        "--exclude-objects", nargs="+", action="extend", default=[], metavar="TABLE",
        help="Script every table except these"
    )

    drop_create = parser.add_mutually_exclusive_group(required=True)
    drop_create.add_argument("--script-drop-create", action="store_true", help="Script DROP and CREATE")
    drop_create.add_argument("--script-drop", action="store_true", help="Script DROP only")
    drop_create.add_argument("--script-create", action="store_true", help="Script CREATE only")

    scheme_data = parser.add_mutually_exclusive_group(required=True)
    scheme_data.add_argument("--schema-and-data", action="store_true", help="Script schema and data")
    scheme_data.add_argument("--schema-only", action="store_true", help="Script schema only")
    scheme_data.add_argument("--data-only", action="store_true", help="Script data only")

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def describe_options(args: argparse.Namespace) -> str:
    """Options as indented JSON with the password hidden."""
    options = dict(vars(args))
    if options.get("password"):
        options["password"] = "***"
    return json.dumps(options, indent=2, default=str)


def write_output(output_file: str, content: str, encoding: str) -> None:
    """Write the script, creating the parent directory if needed."""
    path = Path(output_file)
    if not path.parent.exists():
        path.parent.mkdir(parents=True)
        logger.info(f"Created directory {path.parent}")

    path.write_text(content, encoding=encoding)
    logger.info(f"Wrote {path}")


def run(args: argparse.Namespace) -> int:
    """
    Generate the script described by parsed arguments.

    Returns:
        Process exit status
    """
    logger.debug(f"\n{describe_options(args)}\n")

    try:
        settings = ConnectionSettings.from_env().with_overrides(
            server=args.server,
            database=args.database,
            user=args.user,
            password=args.password,
            encrypt=args.encrypt,
            trusted_connection=args.trusted_connection,
        )
        settings.validate()

        run_config = RunConfiguration.from_flags(
            settings.database,
            script_drop_create=args.script_drop_create,
            script_drop=args.script_drop,
            script_create=args.script_create,
            schema_and_data=args.schema_and_data,
            schema_only=args.schema_only,
            data_only=args.data_only,
            include_objects=args.include_objects,
            exclude_objects=args.exclude_objects,
        )

        with connect(settings) as connection:
            repo = CatalogRepository(connection)
            tables = repo.fetch_tables()
            script = ScriptAssembler(run_config).assemble(tables, repo.open_rows)

        if args.output_file:
            write_output(args.output_file, script, get_defaults().script.output_encoding)
        else:
            print(script)

    except (ScriptGenerationError, RepositoryError, OSError) as e:
        logger.error(f"Script generation failed: {e}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        level="DEBUG" if args.verbose else os.environ.get("LOG_LEVEL", "INFO"),
        json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
    )
    logger.info(f"mssql-script-tool {__version__} starting")

    status = run(args)

    if status == 0:
        logger.info("Script generation completed")
    return status


if __name__ == "__main__":
    sys.exit(main())
