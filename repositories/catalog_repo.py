# ============================================================================
# CATALOG REPOSITORY
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Repository - SQL Server catalog and table rows
# PURPOSE: Read table/column metadata and open per-table row cursors
# CREATED: 19 OCT 2026
# ============================================================================
"""
Catalog Repository

Reads sys.tables / sys.columns metadata into TableDescriptors and opens
row cursors for INSERT generation.

One row of COLUMN_METADATA_SQL is one column. The query derives:
    DIGITS               length / precision,scale / fractional scale, or ''
    IS_NULLABLE          'YES' / 'NO'
    IDENTITY_SET         'IDENTITY(seed,increment)' or NULL
    PRIMARY_KEY_ORDINAL  key ordinal within the primary key, or NULL
    IS_UNIQUE            bit, column belongs to a UNIQUE constraint
    COLUMN_DEFAULT       default definition with outer parentheses removed

Usage:
    with connect(settings) as conn:
        repo = CatalogRepository(conn)
        tables = repo.fetch_tables()
        rows = repo.open_rows(tables[0])
"""

from typing import Any, Dict, Iterator, List, Sequence

from core.models import ColumnDescriptor, TableDescriptor, group_tables
from repositories.base import BaseRepository


COLUMN_METADATA_SQL = """
SELECT
    schemas.name AS TABLE_SCHEMA,
    tables.name AS TABLE_NAME,
    columns.column_id AS COLUMN_ID,
    columns.name AS COLUMN_NAME,
    types.name AS DATA_TYPE,
    CASE
        WHEN types.name IN ('varchar', 'nvarchar', 'varbinary') AND columns.max_length = -1 THEN
            'MAX'
        WHEN types.name IN ('decimal', 'numeric') THEN
            CONVERT(NVARCHAR(10), columns.precision) + ', ' + CONVERT(NVARCHAR(10), columns.scale)
        WHEN types.name IN ('binary', 'char', 'varbinary', 'varchar') THEN
            CONVERT(NVARCHAR(10), columns.max_length)
        WHEN types.name IN ('nchar', 'nvarchar') THEN
            CONVERT(NVARCHAR(10), (columns.max_length / 2))
        WHEN types.name IN ('datetime2', 'datetimeoffset', 'time') THEN
            CONVERT(NVARCHAR(10), columns.scale)
        ELSE
            ''
    END AS DIGITS,
    CASE
        WHEN columns.is_nullable = 1 THEN 'YES'
        ELSE 'NO'
    END AS IS_NULLABLE,
    'IDENTITY(' + CONVERT(NVARCHAR(10), identity_columns.seed_value) + ','
        + CONVERT(NVARCHAR(10), identity_columns.increment_value) + ')' AS IDENTITY_SET,
    primary_keys.key_ordinal AS PRIMARY_KEY_ORDINAL,
    CASE
        WHEN unique_keys.key_ordinal IS NULL THEN CONVERT(bit, 'FALSE')
        ELSE CONVERT(bit, 'TRUE')
    END AS IS_UNIQUE,
    CASE
        WHEN LEFT(default_constraints.definition, 2) = '((' AND RIGHT(default_constraints.definition, 2) = '))' THEN
            SUBSTRING(default_constraints.definition, 3, LEN(default_constraints.definition) - 4)
        WHEN LEFT(default_constraints.definition, 1) = '(' AND RIGHT(default_constraints.definition, 1) = ')' THEN
            SUBSTRING(default_constraints.definition, 2, LEN(default_constraints.definition) - 2)
        ELSE
            NULL
    END AS COLUMN_DEFAULT
FROM
    sys.tables
INNER JOIN sys.schemas
    ON tables.schema_id = schemas.schema_id
INNER JOIN sys.columns
    ON tables.object_id = columns.object_id
INNER JOIN sys.types
    ON columns.user_type_id = types.user_type_id
LEFT OUTER JOIN sys.identity_columns
    ON columns.object_id = identity_columns.object_id
    AND columns.column_id = identity_columns.column_id
LEFT OUTER JOIN sys.default_constraints
    ON columns.default_object_id = default_constraints.object_id
LEFT OUTER JOIN (
    SELECT index_columns.object_id, index_columns.column_id, index_columns.key_ordinal
    FROM sys.index_columns
    INNER JOIN sys.key_constraints
        ON key_constraints.type = 'PK'
        AND index_columns.object_id = key_constraints.parent_object_id
        AND index_columns.index_id = key_constraints.unique_index_id
) AS primary_keys
    ON columns.object_id = primary_keys.object_id
    AND columns.column_id = primary_keys.column_id
LEFT OUTER JOIN (
    SELECT index_columns.object_id, index_columns.column_id, index_columns.key_ordinal
    FROM sys.index_columns
    INNER JOIN sys.key_constraints
        ON key_constraints.type = 'UQ'
        AND index_columns.object_id = key_constraints.parent_object_id
        AND index_columns.index_id = key_constraints.unique_index_id
) AS unique_keys
    ON columns.object_id = unique_keys.object_id
    AND columns.column_id = unique_keys.column_id
ORDER BY
    tables.object_id,
    columns.column_id
"""

ROWS_SQL_TEMPLATE = "SELECT * FROM {table}"


class CatalogRows:
    """
    Row cursor of one table returned by CatalogRepository.open_rows().

    Rows are fetched while iterating, so driver errors raised then are
    wrapped in RepositoryError the same way as errors from execute().
    """

    def __init__(self, repository: BaseRepository, cursor, table: TableDescriptor):
        self._repository = repository
        self._cursor = cursor
        self.table = table

    @property
    def description(self):
        return self._cursor.description

    def __iter__(self) -> Iterator[Sequence[Any]]:
        with self._repository._error_context("row fetch", self.table.qualified_name):
            for row in self._cursor:
                yield row

    def close(self) -> None:
        self._cursor.close()


class CatalogRepository(BaseRepository):
    """
    Catalog metadata and row access over one pyodbc connection.

    Cursors returned by open_rows() belong to the caller, who closes them
    after draining.
    """

    def __init__(self, connection):
        """
        Args:
            connection: Open pyodbc.Connection (or any DB-API connection)
        """
        super().__init__()
        self.connection = connection

    def fetch_column_records(self) -> List[Dict[str, Any]]:
        """Run the metadata query and return one dict per column."""
        with self._error_context("catalog metadata query"):
            cursor = self.connection.cursor()
            try:
                cursor.execute(COLUMN_METADATA_SQL)
                names = [column[0] for column in cursor.description]
                records = [dict(zip(names, row)) for row in cursor.fetchall()]
            finally:
                cursor.close()

        self.logger.debug(f"Fetched {len(records)} column records")
        return records

    def fetch_tables(self) -> List[TableDescriptor]:
        """
        Read every user table with its columns.

        Returns:
            TableDescriptors in catalog order

        Raises:
            UnrecognizedTypeName: If a column has an unsupported data type
            RepositoryError: If the metadata query fails
        """
        columns = [ColumnDescriptor.from_record(record) for record in self.fetch_column_records()]
        tables = group_tables(columns)
        self.logger.info(f"Loaded {len(tables)} tables ({len(columns)} columns) from catalog")
        return tables

    def open_rows(self, table: TableDescriptor) -> CatalogRows:
        """
        Open a cursor over every row of a table.

        Args:
            table: Table to read

        Returns:
            CatalogRows over the executed cursor; description lists the
            table's columns
        """
        with self._error_context("row query", table.qualified_name):
            cursor = self.connection.cursor()
            try:
                cursor.execute(ROWS_SQL_TEMPLATE.format(table=table.qualified_name))
            except Exception:
                cursor.close()
                raise
        return CatalogRows(self, cursor, table)


__all__ = ["CatalogRepository", "CatalogRows", "COLUMN_METADATA_SQL"]
