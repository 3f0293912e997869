"""Traversal control protocol consulted by DirectoryScanner during a walk."""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from dirscan.patterns.pattern_set import PatternSet

from .scan_action import ScanAction

if TYPE_CHECKING:
    from .directory_scanner import DirectoryScanner


class ScanControl(ABC):
    """
    Abstract base class for visitors that steer a directory scan.

    The scanner calls ``visit_directory`` before it records and descends into a
    directory and ``visit_file`` before it records an included file. The returned
    ScanAction decides whether the entry is recorded, whether its subtree is walked,
    and whether the scan goes on at all.

    Implementations may keep state for the duration of a scan. The scanner never
    resets that state, so reusing one control for several scans means resetting it
    yourself.

    Example:
        >>> class SkipBuildDirectories(ScanControl):
        ...     def visit_directory(self, name, directory):
        ...         if directory.name == "build":
        ...             return ScanAction.NO_RECURSE
        ...         return ScanAction.CONTINUE
        ...     def visit_file(self, name, file):
        ...         return ScanAction.CONTINUE
        >>> from pathlib import Path
        >>> SkipBuildDirectories().visit_directory("out/build", Path("out/build"))
        <ScanAction.NO_RECURSE: 'no_recurse'>
    """

    @abstractmethod
    def visit_directory(self, name: str, directory: Path) -> ScanAction:
        """
        Called for each directory the scanner is about to record and walk.

        Args:
            name (str): Directory path relative to the scan root ("" for the root itself).
            directory (Path): The directory on disk.

        Returns:
            ScanAction: CONTINUE to record and descend, NO_RECURSE to skip it entirely,
                ABORT_DIRECTORY to stop processing its siblings, ABORT to stop the scan.
        """
        pass

    @abstractmethod
    def visit_file(self, name: str, file: Path) -> ScanAction:
        """
        Called for each included file before it is recorded.

        Args:
            name (str): File path relative to the scan root.
            file (Path): The file on disk.

        Returns:
            ScanAction: CONTINUE to record it, ABORT_DIRECTORY to stop processing its
                siblings, ABORT to stop the scan. NO_RECURSE behaves like CONTINUE.
        """
        pass


class EnforceExcludesOverIncludes(ScanControl):
    """Control that refuses to walk into directories matched by an exclude pattern.

    A scan with a broad include such as ``**`` still descends into excluded
    directories so that includes below them can be found. With this control
    attached, an excluded directory is recorded as excluded and its subtree is
    never visited.

    Attributes:
        excludes (PatternSet): Patterns naming directories that must not be walked.
        case_sensitive (bool): Whether matching is case sensitive.

    Example:
        >>> from pathlib import Path
        >>> control = EnforceExcludesOverIncludes.from_strings(["**/target/**"], separator="/")
        >>> control.visit_directory("module/target", Path("module/target"))
        <ScanAction.NO_RECURSE: 'no_recurse'>
        >>> control.visit_directory("module/src", Path("module/src"))
        <ScanAction.CONTINUE: 'continue'>
    """

    def __init__(self, excludes: PatternSet, case_sensitive: bool = True) -> None:
        self.excludes = excludes
        self.case_sensitive = case_sensitive

    @classmethod
    def from_strings(
        cls, excludes: Sequence[str], case_sensitive: bool = True, separator: str = os.sep
    ) -> "EnforceExcludesOverIncludes":
        return cls(PatternSet.from_strings(excludes, separator, kind="excludes"), case_sensitive)

    @classmethod
    def for_scanner(cls, scanner: "DirectoryScanner") -> "EnforceExcludesOverIncludes":
        """Build a control sharing the exclude patterns and case rule of ``scanner``."""
        return cls(scanner.excludes_patterns, scanner.case_sensitive)

    def visit_directory(self, name: str, directory: Path) -> ScanAction:
        if name and self.excludes.match(name, self.case_sensitive):
            return ScanAction.NO_RECURSE
        return ScanAction.CONTINUE

    def visit_file(self, name: str, file: Path) -> ScanAction:
        return ScanAction.CONTINUE
