# ============================================================================
# SELECTION POLICY
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Core model - Target table selection
# PURPOSE: Resolve which tables take part in a run (all / include / exclude)
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: SelectionPolicy
# DEPENDENCIES: dataclasses
# ============================================================================
"""
Selection Policy

Exactly one variant is active per run:
    ALL      - every table, in catalog order
    INCLUDE  - the named tables, in the order the caller gave them
    EXCLUDE  - every table except the named ones, in catalog order

Names are table names without schema, matching TableDescriptor.table_name.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from core.contracts import TargetTableType
from core.errors import InvalidSelectionPolicy


@dataclass(frozen=True)
class SelectionPolicy:
    """Which tables are scripted."""
    kind: TargetTableType = TargetTableType.ALL
    names: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.kind == TargetTableType.ALL and self.names:
            raise InvalidSelectionPolicy("The ALL selection policy takes no table names")

    @classmethod
    def all(cls) -> "SelectionPolicy":
        return cls(TargetTableType.ALL)

    @classmethod
    def include(cls, names: Iterable[str]) -> "SelectionPolicy":
        return cls(TargetTableType.INCLUDE, tuple(names))

    @classmethod
    def exclude(cls, names: Iterable[str]) -> "SelectionPolicy":
        return cls(TargetTableType.EXCLUDE, tuple(names))

    @classmethod
    def from_lists(
        cls,
        include: Optional[Sequence[str]] = None,
        exclude: Optional[Sequence[str]] = None,
    ) -> "SelectionPolicy":
        """
        Build the policy from include/exclude option values.

        Raises:
            InvalidSelectionPolicy: If both lists are non-empty
        """
        include = list(include or [])
        exclude = list(exclude or [])

        if include and exclude:
            raise InvalidSelectionPolicy(
                f"Include and exclude lists cannot both be given. "
                f"include={len(include)} exclude={len(exclude)}"
            )
        if include:
            return cls.include(include)
        if exclude:
            return cls.exclude(exclude)
        return cls.all()

    def resolve(self, all_table_names: Sequence[str]) -> List[str]:
        """
        Select target table names.

        Include names that match no table are dropped without a diagnostic.
        """
        if self.kind == TargetTableType.ALL:
            return list(all_table_names)

        if self.kind == TargetTableType.INCLUDE:
            known = set(all_table_names)
            return [name for name in self.names if name in known]

        excluded = set(self.names)
        return [name for name in all_table_names if name not in excluded]


__all__ = ["SelectionPolicy"]
