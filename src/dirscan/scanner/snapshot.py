"""Successive snapshots of a directory's included files."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from dirscan.types import PathType

from .directory_scanner import DirectoryScanner
from .scan_result import ScanDiff, diff_files

logger = logging.getLogger(__name__)


class DirectorySnapshot:
    """Track which files appear and disappear between captures of a directory.

    Only the included files of the most recent capture are retained. Each capture
    rescans the directory, diffs the new file list against the retained one and
    then makes the new list the baseline for the next capture. The first capture
    has no baseline and reports nothing added or removed.

    Attributes:
        root_directory (Path): Directory being captured.

    Example:
        >>> snapshot = DirectorySnapshot("build/output")  # doctest: +SKIP
        >>> snapshot.capture()  # doctest: +SKIP
        >>> # ... the build writes app.jar and removes app.war ...
        >>> snapshot.capture()  # doctest: +SKIP
        >>> snapshot.get_files_added(), snapshot.get_files_removed()  # doctest: +SKIP
        (['app.jar'], ['app.war'])
    """

    def __init__(self, root_directory: PathType) -> None:
        self.root_directory = Path(root_directory)
        self._old_files: Optional[List[str]] = None
        self._new_files: List[str] = []
        self._last_diff = ScanDiff()

    def capture(self, scanner: Optional[DirectoryScanner] = None) -> ScanDiff:
        """Scan the root directory and diff it against the previous capture.

        Args:
            scanner: Scanner to use, for custom patterns or controls. Its base
                directory is set to the snapshot root. A default scanner
                (everything included) is used when omitted.

        Returns:
            The difference to the previous capture (empty on the first capture).

        Raises:
            ConfigurationError: If the root directory doesn't exist or isn't a directory.
            TraversalIOError: If a directory cannot be listed during the scan.
        """
        if scanner is None:
            scanner = DirectoryScanner(self.root_directory)
        else:
            scanner.basedir = self.root_directory
        scanner.scan()

        self._new_files = scanner.get_included_files()
        if self._old_files is not None:
            self._last_diff = self.calculate_diff(self._old_files, self._new_files)
        else:
            self._last_diff = ScanDiff()
        logger.debug(
            "Captured %s: %d file(s), %d added, %d removed",
            self.root_directory,
            len(self._new_files),
            len(self._last_diff.added),
            len(self._last_diff.removed),
        )

        # The files just scanned are the baseline for the next capture
        self._old_files = self._new_files
        return self._last_diff

    @staticmethod
    def calculate_diff(old_files: Sequence[str], new_files: Sequence[str]) -> ScanDiff:
        return diff_files(old_files, new_files)

    def get_scanned_files(self) -> List[str]:
        """Included files of the most recent capture."""
        return list(self._new_files)

    def get_files_added(self) -> List[str]:
        """Files added by the most recent capture, sorted."""
        return sorted(self._last_diff.added)

    def get_files_removed(self) -> List[str]:
        """Files removed by the most recent capture, sorted."""
        return sorted(self._last_diff.removed)
