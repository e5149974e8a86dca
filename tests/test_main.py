# ============================================================================
# COMMAND LINE TESTS
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Tests - CLI entry point
# PURPOSE: Verify argument parsing, output routing, and exit status
# CREATED: 19 OCT 2026
# ============================================================================
"""
Command Line Tests

The database layer is patched out: main.connect yields a MagicMock
connection and main.CatalogRepository returns a fake repository.

Run with:
    pytest tests/test_main.py -v
"""

import json
from unittest.mock import MagicMock, patch

import pytest

import main
from core.errors import UnrecognizedTypeName
from core.models import ColumnDescriptor, TableDescriptor
from repositories import RepositoryError
from services import InMemoryRows


BASE_ARGS = ["-S", "db01", "-d", "Sales", "-E"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MSSQL_SERVER", "MSSQL_DATABASE", "MSSQL_USER", "MSSQL_PASSWORD",
                 "MSSQL_TRUSTED_CONNECTION", "MSSQL_ENCRYPT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def no_logging_setup():
    with patch("main.configure_logging") as configure:
        yield configure


def _make_tables():
    column = ColumnDescriptor(
        table_schema="dbo", table_name="Orders", column_name="id", canonical_type="int", nullable=False
    )
    return [TableDescriptor(columns=(column,))]


def _make_repo(tables=None, rows=None):
    repo = MagicMock()
    repo.fetch_tables.return_value = _make_tables() if tables is None else tables
    repo.open_rows.side_effect = lambda table: InMemoryRows(table.column_names, rows or [])
    return repo


# ============================================================================
# PARSER
# ============================================================================


class TestParser:
    def test_full_arguments(self):
        args = main.build_parser().parse_args(
            BASE_ARGS + ["-f", "out.sql", "--script-create", "--schema-only",
                         "--include-objects", "Orders", "Customers"]
        )
        assert args.server == "db01"
        assert args.database == "Sales"
        assert args.trusted_connection is True
        assert args.encrypt is False
        assert args.output_file == "out.sql"
        assert args.script_create and not args.script_drop
        assert args.schema_only
        assert args.include_objects == ["Orders", "Customers"]
        assert args.exclude_objects == []

    def test_drop_create_group_required(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(BASE_ARGS + ["--schema-only"])

    def test_schema_data_group_required(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(BASE_ARGS + ["--script-drop"])

    def test_two_modes_rejected(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(
                BASE_ARGS + ["--script-drop", "--script-create", "--schema-only"]
            )

    def test_include_and_exclude_rejected(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(
                BASE_ARGS + ["--script-drop", "--schema-only",
                             "--include-objects", "A", "--exclude-objects", "B"]
            )

    def test_describe_options_hides_password(self):
        args = main.build_parser().parse_args(
            ["-S", "db01", "-d", "Sales", "-U", "sa", "-P", "secret", "--script-drop", "--schema-only"]
        )
        options = json.loads(main.describe_options(args))
        assert options["password"] == "***"
        assert options["user"] == "sa"


# ============================================================================
# RUN
# ============================================================================


class TestMain:
    def test_script_to_stdout(self, capsys, no_logging_setup):
        repo = _make_repo(rows=[(1,), (2,)])
        with patch("main.connect") as connect, patch("main.CatalogRepository", return_value=repo):
            status = main.main(BASE_ARGS + ["--script-drop-create", "--schema-and-data"])

        assert status == 0
        settings = connect.call_args[0][0]
        assert settings.server == "db01"
        assert settings.database == "Sales"
        assert settings.trusted_connection is True

        out = capsys.readouterr().out
        assert out.startswith("USE [Sales]\nGO\n")
        assert "DROP TABLE [dbo].[Orders]" in out
        assert "CREATE TABLE [dbo].[Orders](" in out
        assert "INSERT [dbo].[Orders] ([id]) VALUES (2)" in out
        no_logging_setup.assert_called_once()

    def test_script_to_file(self, tmp_path, capsys, no_logging_setup):
        output = tmp_path / "nested" / "sales.sql"
        with patch("main.connect"), patch("main.CatalogRepository", return_value=_make_repo()):
            status = main.main(BASE_ARGS + ["--script-create", "--schema-only", "-f", str(output)])

        assert status == 0
        text = output.read_text(encoding="utf-8")
        assert text.startswith("USE [Sales]\nGO\n")
        assert "CREATE TABLE [dbo].[Orders](" in text
        assert "DROP TABLE" not in text
        assert capsys.readouterr().out == ""

    def test_verbose_sets_debug(self, no_logging_setup):
        with patch("main.connect"), patch("main.CatalogRepository", return_value=_make_repo()):
            main.main(BASE_ARGS + ["--script-drop", "--schema-only", "-v"])
        assert no_logging_setup.call_args.kwargs["level"] == "DEBUG"

    def test_missing_credentials(self, no_logging_setup):
        with patch("main.connect") as connect:
            status = main.main(["-S", "db01", "-d", "Sales", "--script-drop", "--schema-only"])
        assert status == 1
        connect.assert_not_called()

    def test_connection_failure(self, no_logging_setup):
        with patch("main.connect", side_effect=RepositoryError("Connection failed", operation="connect")):
            status = main.main(BASE_ARGS + ["--script-drop", "--schema-only"])
        assert status == 1

    def test_unsupported_type_writes_nothing(self, tmp_path, no_logging_setup):
        output = tmp_path / "out.sql"
        repo = MagicMock()
        repo.fetch_tables.side_effect = UnrecognizedTypeName("geography", "[dbo].[Places].[shape]")

        with patch("main.connect"), patch("main.CatalogRepository", return_value=repo):
            status = main.main(BASE_ARGS + ["--script-create", "--schema-only", "-f", str(output)])

        assert status == 1
        assert not output.exists()

    def test_database_from_environment(self, monkeypatch, capsys, no_logging_setup):
        monkeypatch.setenv("MSSQL_DATABASE", "EnvDb")
        with patch("main.connect"), patch("main.CatalogRepository", return_value=_make_repo()):
            status = main.main(["-S", "db01", "-E", "--script-drop", "--schema-only"])

        assert status == 0
        assert capsys.readouterr().out.startswith("USE [EnvDb]\nGO\n")

    def test_row_fetch_failure(self, capsys, no_logging_setup):
        class FailingCursor:
            description = [("id",)]

            def execute(self, sql):
                pass

            def __iter__(self):
                raise RuntimeError("Communication link failure")

            def close(self):
                pass

        connection = MagicMock()
        connection.cursor.return_value = FailingCursor()

        with patch("main.connect") as connect, \
                patch.object(main.CatalogRepository, "fetch_tables", return_value=_make_tables()):
            connect.return_value.__enter__.return_value = connection
            status = main.main(BASE_ARGS + ["--script-drop-create", "--data-only"])

        assert status == 1
        assert capsys.readouterr().out == ""
