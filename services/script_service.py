# ============================================================================
# SCRIPT SERVICE
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Service - Script document assembly
# PURPOSE: Select target tables and assemble DROP / CREATE / INSERT blocks
# CREATED: 19 OCT 2026
# EXPORTS: ScriptAssembler, ScriptDocument, RowSource
# DEPENDENCIES: pydantic, core.models, services.row_encoder
# ============================================================================
"""
Script Service

Assembles the final script document:

    USE [<database>]
    GO
    <drop block>      if schema is scripted and mode is not create-only
    <create block>    if schema is scripted and mode is not drop-only
    <insert block>    if data is scripted

Blocks are produced independently and joined once. A block that is not
generated contributes nothing. Tables are scripted in catalog order;
rows are read one table at a time, and each row cursor is drained and
closed before the next one is opened.

A pass with no target tables is skipped with a warning rather than
failing the run.
"""

from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel

from core.config import RunConfiguration
from core.errors import EmptyTargetSet
from core.logging import ComponentType, get_logger, log_context
from core.models import TableDescriptor
from core.schema.ddl_utils import USE_DATABASE_TEMPLATE
from services.row_encoder import RowCursor, RowEncoder

logger = get_logger(__name__, ComponentType.SERVICE)

# Opens the row cursor of one table
RowSource = Callable[[TableDescriptor], RowCursor]


class ScriptDocument(BaseModel):
    """The three script blocks of one run. Empty string = not generated."""

    model_config = {"frozen": True}

    database_name: str
    drop_block: str = ""
    create_block: str = ""
    insert_block: str = ""

    def render(self) -> str:
        return (
            USE_DATABASE_TEMPLATE.format(database=self.database_name)
            + self.drop_block
            + self.create_block
            + self.insert_block
        )

    def __str__(self) -> str:
        return self.render()


class ScriptAssembler:
    """
    Produce the script document for one run configuration.

    Usage:
        assembler = ScriptAssembler(run_config)
        text = assembler.assemble(tables, repo.open_rows)
    """

    def __init__(self, run_config: RunConfiguration, row_encoder: Optional[RowEncoder] = None):
        self.run_config = run_config
        self.row_encoder = row_encoder or RowEncoder()

    # =========================================================================
    # TARGETING
    # =========================================================================

    def resolve_targets(self, tables: Sequence[TableDescriptor]) -> List[TableDescriptor]:
        """
        Tables selected by the run's SelectionPolicy, in catalog order.
        """
        target_names = set(self.run_config.selection.resolve([t.table_name for t in tables]))
        return [t for t in tables if t.table_name in target_names]

    @staticmethod
    def _require_targets(pass_name: str, targets: Sequence[TableDescriptor]) -> None:
        if not targets:
            raise EmptyTargetSet(pass_name)

    # =========================================================================
    # BLOCKS
    # =========================================================================

    def build_drop_block(self, targets: Sequence[TableDescriptor]) -> str:
        """DROP fragments joined by newlines, with a trailing newline."""
        self._require_targets("drop", targets)
        return "\n".join([t.render_drop() for t in targets] + [""])

    def build_create_block(self, targets: Sequence[TableDescriptor]) -> str:
        """CREATE fragments joined by newlines, with a trailing newline."""
        self._require_targets("create", targets)
        return "\n".join([t.render_create() for t in targets] + [""])

    def build_insert_block(self, targets: Sequence[TableDescriptor], row_source: RowSource) -> str:
        """INSERT fragments; each table's cursor is drained and closed in turn."""
        self._require_targets("insert", targets)

        fragments = []
        for table in targets:
            with log_context(table=table.qualified_name, operation="insert"):
                rows = row_source(table)
                try:
                    fragments.append(self.row_encoder.encode_inserts(table, rows))
                finally:
                    close = getattr(rows, "close", None)
                    if close is not None:
                        close()
        return "\n".join(fragments)

    def _run_pass(self, pass_name: str, build: Callable[[], str]) -> str:
        try:
            with log_context(operation=pass_name):
                return build()
        except EmptyTargetSet as e:
            logger.warning(str(e))
            return ""

    # =========================================================================
    # DOCUMENT
    # =========================================================================

    def build_document(
        self,
        tables: Sequence[TableDescriptor],
        row_source: Optional[RowSource] = None,
    ) -> ScriptDocument:
        """
        Generate every block the run configuration asks for.

        Args:
            tables: All catalog tables, in retrieval order
            row_source: Opens a table's row cursor; required when data is scripted

        Returns:
            ScriptDocument

        Raises:
            ColumnOrderMismatch: If a row cursor's columns differ from its table
            ValueError: If data is scripted but no row_source was given
        """
        config = self.run_config

        with log_context(database=config.database_name):
            targets = self.resolve_targets(tables)
            logger.info(f"{len(targets)} of {len(tables)} tables selected ({config.selection.kind.value})")

            drop_block = create_block = insert_block = ""

            if config.emits_drop:
                drop_block = self._run_pass("drop", lambda: self.build_drop_block(targets))

            if config.emits_create:
                create_block = self._run_pass("create", lambda: self.build_create_block(targets))

            if config.emits_insert:
                if row_source is None:
                    raise ValueError("A row source is required to script table data")
                insert_block = self._run_pass(
                    "insert", lambda: self.build_insert_block(targets, row_source)
                )

        return ScriptDocument(
            database_name=config.database_name,
            drop_block=drop_block,
            create_block=create_block,
            insert_block=insert_block,
        )

    def assemble(
        self,
        tables: Sequence[TableDescriptor],
        row_source: Optional[RowSource] = None,
    ) -> str:
        """Generate the script document and return its text."""
        return self.build_document(tables, row_source).render()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["ScriptAssembler", "ScriptDocument", "RowSource"]
