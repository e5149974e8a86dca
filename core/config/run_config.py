# ============================================================================
# RUN CONFIGURATION
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core - Per-run options
# PURPOSE: Which sections to script, for which database and tables
# CREATED: 19 OCT 2026
# ============================================================================
"""
Run Configuration

Built by the command-line layer and consumed by the ScriptAssembler.
The command line already enforces one choice per option group;
from_flags() checks the same rules again so the core never runs with a
contradictory configuration.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, TypeVar

from core.contracts import DropCreate, SchemeData
from core.errors import InvalidSelectionPolicy
from core.models.selection import SelectionPolicy

_Mode = TypeVar("_Mode")


def _single_choice(group: str, flags: Dict[str, bool], values: Dict[str, _Mode]) -> _Mode:
    """Return the value of the one flag that is set, or raise."""
    chosen = [name for name, is_set in flags.items() if is_set]
    if not chosen:
        raise InvalidSelectionPolicy(f"One of [{', '.join(flags)}] must be specified for {group}")
    if len(chosen) > 1:
        raise InvalidSelectionPolicy(
            f"Only one of [{', '.join(flags)}] may be specified for {group}. "
            f"Given: [{', '.join(chosen)}]"
        )
    return values[chosen[0]]


@dataclass(frozen=True)
class RunConfiguration:
    """Options for one script generation run."""
    database_name: str
    drop_create: DropCreate = DropCreate.DROP_AND_CREATE
    scheme_data: SchemeData = SchemeData.SCHEME_AND_DATA
    selection: SelectionPolicy = field(default_factory=SelectionPolicy.all)

    @property
    def emits_drop(self) -> bool:
        return self.scheme_data != SchemeData.DATA_ONLY and self.drop_create != DropCreate.CREATE_ONLY

    @property
    def emits_create(self) -> bool:
        return self.scheme_data != SchemeData.DATA_ONLY and self.drop_create != DropCreate.DROP_ONLY

    @property
    def emits_insert(self) -> bool:
        return self.scheme_data != SchemeData.SCHEME_ONLY

    @classmethod
    def from_flags(
        cls,
        database_name: str,
        *,
        script_drop_create: bool = False,
        script_drop: bool = False,
        script_create: bool = False,
        schema_and_data: bool = False,
        schema_only: bool = False,
        data_only: bool = False,
        include_objects: Optional[Sequence[str]] = None,
        exclude_objects: Optional[Sequence[str]] = None,
    ) -> "RunConfiguration":
        """
        Resolve a configuration from command-line style flags.

        Raises:
            InvalidSelectionPolicy: If zero or several flags of a group are set,
                or both include and exclude lists are non-empty
        """
        drop_create = _single_choice(
            "drop/create",
            {
                "--script-drop-create": script_drop_create,
                "--script-drop": script_drop,
                "--script-create": script_create,
            },
            {
                "--script-drop-create": DropCreate.DROP_AND_CREATE,
                "--script-drop": DropCreate.DROP_ONLY,
                "--script-create": DropCreate.CREATE_ONLY,
            },
        )
        scheme_data = _single_choice(
            "schema/data",
            {
                "--schema-and-data": schema_and_data,
                "--schema-only": schema_only,
                "--data-only": data_only,
            },
            {
                "--schema-and-data": SchemeData.SCHEME_AND_DATA,
                "--schema-only": SchemeData.SCHEME_ONLY,
                "--data-only": SchemeData.DATA_ONLY,
            },
        )

        return cls(
            database_name=database_name,
            drop_create=drop_create,
            scheme_data=scheme_data,
            selection=SelectionPolicy.from_lists(include_objects, exclude_objects),
        )


__all__ = ["RunConfiguration"]
