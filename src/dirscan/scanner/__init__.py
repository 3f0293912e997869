"""Directory scanning against include and exclude patterns."""

from .directory_scanner import DirectoryScanner
from .scan_action import ScanAction
from .scan_control import EnforceExcludesOverIncludes, ScanControl
from .scan_result import ScanDiff, diff_files
from .snapshot import DirectorySnapshot

__all__ = [
    "DirectoryScanner",
    "DirectorySnapshot",
    "EnforceExcludesOverIncludes",
    "ScanAction",
    "ScanControl",
    "ScanDiff",
    "diff_files",
]
