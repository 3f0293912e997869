"""Per-scan accumulator for classified entries."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ScanState:
    """Results collected by one ``DirectoryScanner.scan()`` call.

    A new instance is created at the start of every scan and threaded through the
    recursive walk. It is never shared between scans.

    Attributes:
        files_included: Files matching an include and no exclude.
        files_not_included: Files matching no include.
        files_excluded: Files matching an include and an exclude.
        dirs_included: Directories matching an include and no exclude.
        dirs_not_included: Directories matching no include.
        dirs_excluded: Directories matching an include and an exclude.
        pruned_not_included: Directories skipped by the fast pass that match no
            include and cannot hold an included entry. Not yet recorded anywhere.
        pruned_excluded: Excluded directories (already in ``dirs_excluded``) whose
            subtree the fast pass skipped because it cannot hold an included entry.
        slow_scan_complete: Set once the pruned subtrees have been walked.
    """

    files_included: List[str] = field(default_factory=list)
    files_not_included: List[str] = field(default_factory=list)
    files_excluded: List[str] = field(default_factory=list)
    dirs_included: List[str] = field(default_factory=list)
    dirs_not_included: List[str] = field(default_factory=list)
    dirs_excluded: List[str] = field(default_factory=list)
    pruned_not_included: List[str] = field(default_factory=list)
    pruned_excluded: List[str] = field(default_factory=list)
    slow_scan_complete: bool = False

    def counts(self) -> str:
        """One-line summary used in debug logging."""
        return (
            f"files included={len(self.files_included)} excluded={len(self.files_excluded)} "
            f"not included={len(self.files_not_included)}; "
            f"directories included={len(self.dirs_included)} excluded={len(self.dirs_excluded)} "
            f"not included={len(self.dirs_not_included)}"
        )
