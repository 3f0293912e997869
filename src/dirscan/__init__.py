"""Directory scanning with glob include and exclude patterns.

This package classifies the entries of a directory tree against ordered lists of
include and exclude patterns, the way build tools select files for packaging,
filtering or cleanup, and diffs successive snapshots of a tree.
"""

from importlib.metadata import PackageNotFoundError, version

from dirscan.exceptions import ConfigurationError, DirScanError, PatternError, TraversalIOError
from dirscan.patterns import DEFAULT_EXCLUDES, Pattern, PatternSet
from dirscan.scanner import (
    DirectoryScanner,
    DirectorySnapshot,
    EnforceExcludesOverIncludes,
    ScanAction,
    ScanControl,
    ScanDiff,
    diff_files,
)

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dirscan")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "ConfigurationError",
    "DEFAULT_EXCLUDES",
    "DirScanError",
    "DirectoryScanner",
    "DirectorySnapshot",
    "EnforceExcludesOverIncludes",
    "Pattern",
    "PatternError",
    "PatternSet",
    "ScanAction",
    "ScanControl",
    "ScanDiff",
    "TraversalIOError",
    "diff_files",
]
