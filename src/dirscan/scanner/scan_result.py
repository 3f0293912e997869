"""Differences between two included-file snapshots."""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional


@dataclass(frozen=True)
class ScanDiff:
    """Paths added and removed between an old and a new snapshot.

    Paths are compared as exact relative path strings; duplicates collapse and
    no order is implied.

    Attributes:
        added (FrozenSet[str]): Paths present only in the new snapshot.
        removed (FrozenSet[str]): Paths present only in the old snapshot.

    Example:
        >>> diff = diff_files(["a.txt", "b.txt"], ["b.txt", "c.txt"])
        >>> sorted(diff.added), sorted(diff.removed)
        (['c.txt'], ['a.txt'])
        >>> diff.is_empty
        False
    """

    added: FrozenSet[str] = field(default_factory=frozenset)
    removed: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


def diff_files(old_files: Optional[Iterable[str]], new_files: Optional[Iterable[str]]) -> ScanDiff:
    """Compute added and removed paths between two snapshots.

    Args:
        old_files: Paths of the previous snapshot. None is treated as empty.
        new_files: Paths of the current snapshot. None is treated as empty.

    Returns:
        ScanDiff with ``removed = old - new`` and ``added = new - old``.
    """
    old_set = frozenset(old_files or ())
    new_set = frozenset(new_files or ())
    return ScanDiff(added=new_set - old_set, removed=old_set - new_set)
