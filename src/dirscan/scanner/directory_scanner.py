"""Directory scanner classifying a tree against include and exclude patterns.

This module provides the DirectoryScanner class. A scan walks the tree once in
fast mode, skipping every subtree that cannot hold an included entry, and
completes the skipped subtrees lazily the first time excluded or not-included
results are requested.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Set

from dirscan.exceptions import ConfigurationError, TraversalIOError
from dirscan.patterns.defaults import DEFAULT_EXCLUDES
from dirscan.patterns.pattern_set import PatternSet
from dirscan.types import PathType

from .file_identifier import FileIdentifier
from .scan_action import ScanAction
from .scan_control import ScanControl
from .scan_result import ScanDiff, diff_files
from .scan_state import ScanState

logger = logging.getLogger(__name__)

DEFAULT_INCLUDES = ("**",)

_STOP_ACTIONS = (ScanAction.ABORT, ScanAction.ABORT_DIRECTORY)


class DirectoryScanner:
    """Classify every file and directory below a base directory.

    Each entry is compared, by its path relative to the base directory, against
    the include and exclude patterns and lands in exactly one of three categories:

    - included: matches an include pattern and no exclude pattern
    - excluded: matches an include pattern and an exclude pattern
    - not included: matches no include pattern

    The root directory itself is classified under the empty name ``""``.

    Fast and slow scanning:
        ``scan()`` performs a fast walk that does not descend into directories
        whose name cannot be extended into an include match. Included results are
        complete after the fast walk, since such subtrees hold no included entry by
        definition. The first call to an excluded or not-included getter walks the
        skipped subtrees exhaustively, once per scan.

    Symbolic Link Behavior:
        With ``follow_symlinks`` (the default) links are resolved and linked
        directories are walked; a link leading back to a directory on the current
        path is classified but not walked again. Without it, a link to a directory
        is recorded as an included directory whatever the patterns say and is never
        descended into, and a link to a file is treated as a file.

    Traversal control:
        An optional ScanControl is consulted before included files are recorded and
        before directories are walked, and may skip subtrees or stop the scan.

    Attributes:
        basedir (Path): Directory to scan.
        case_sensitive (bool): Whether pattern matching is case sensitive.
        follow_symlinks (bool): Whether symbolic links to directories are walked.
        scan_control (Optional[ScanControl]): Visitor consulted during the walk.
        includes_patterns (PatternSet): Compiled include patterns.
        excludes_patterns (PatternSet): Compiled exclude patterns.

    Example:
        >>> scanner = DirectoryScanner("project", includes=["**/*.py"], excludes=["**/test_*"])  # doctest: +SKIP
        >>> scanner.scan()  # doctest: +SKIP
        >>> scanner.get_included_files()  # doctest: +SKIP
        ['pkg/__init__.py', 'pkg/core.py']
        >>> scanner.get_excluded_files()  # doctest: +SKIP
        ['pkg/test_core.py']
    """

    def __init__(
        self,
        basedir: PathType,
        includes: Optional[Sequence[str]] = None,
        excludes: Optional[Sequence[str]] = None,
        case_sensitive: bool = True,
        follow_symlinks: bool = True,
        scan_control: Optional[ScanControl] = None,
        default_excludes: bool = False,
    ) -> None:
        """Initialize a DirectoryScanner.

        Args:
            basedir: Directory to scan. Can be any path-like object.
            includes: Include patterns. None selects everything (``**``).
            excludes: Exclude patterns. None excludes nothing.
            case_sensitive: Whether pattern matching is case sensitive. Defaults to True.
            follow_symlinks: Whether to walk symbolic links to directories. Defaults to True.
            scan_control: Optional visitor consulted during the walk.
            default_excludes: Append the built-in exclude table (version control
                metadata, OS litter, editor backups). Defaults to False.

        Raises:
            PatternError: If a pattern is None or a ``%regex[...]`` pattern is malformed.
        """
        self.basedir = Path(basedir)
        self.case_sensitive = case_sensitive
        self.follow_symlinks = follow_symlinks
        self.scan_control = scan_control
        self.includes = includes
        self.excludes = excludes
        if default_excludes:
            self.add_default_excludes()
        self._state: Optional[ScanState] = None

    @property
    def includes(self) -> Optional[List[str]]:
        """Raw include patterns as configured, or None for the default."""
        return None if self._includes is None else list(self._includes)

    @includes.setter
    def includes(self, includes: Optional[Sequence[str]]) -> None:
        self._includes = None if includes is None else list(includes)
        sources = DEFAULT_INCLUDES if self._includes is None else self._includes
        self.includes_patterns = PatternSet.from_strings(sources, os.sep, kind="includes")

    @property
    def excludes(self) -> Optional[List[str]]:
        """Raw exclude patterns as configured, or None for the default."""
        return None if self._excludes is None else list(self._excludes)

    @excludes.setter
    def excludes(self, excludes: Optional[Sequence[str]]) -> None:
        self._excludes = None if excludes is None else list(excludes)
        self.excludes_patterns = PatternSet.from_strings(self._excludes or [], os.sep, kind="excludes")

    def add_default_excludes(self) -> None:
        """Append the built-in exclude table to the configured excludes."""
        self.excludes = (self._excludes or []) + list(DEFAULT_EXCLUDES)

    def is_included(self, name: str) -> bool:
        return self.includes_patterns.match(name, self.case_sensitive)

    def is_excluded(self, name: str) -> bool:
        return self.excludes_patterns.match(name, self.case_sensitive)

    def could_hold_included(self, name: str) -> bool:
        """True if some path below directory ``name`` might match an include pattern."""
        return self.includes_patterns.matches_any_prefix(name, self.case_sensitive)

    @property
    def has_scanned(self) -> bool:
        """True once a scan has completed and its results are available."""
        return self._state is not None

    def scan(self) -> None:
        """Scan the base directory in fast mode.

        Any results of a previous scan are discarded first. If the walk fails the
        partial results are dropped as well.

        Raises:
            ConfigurationError: If the base directory doesn't exist or isn't a directory.
            TraversalIOError: If a directory cannot be listed or one of its entries
                cannot be inspected during the walk.
        """
        if not self.basedir.exists():
            raise ConfigurationError(f"basedir {self.basedir} does not exist")
        if not self.basedir.is_dir():
            raise ConfigurationError(f"basedir {self.basedir} is not a directory")

        self._state = None
        state = ScanState()
        logger.debug(
            "Scanning %s (includes=%s, excludes=%s)",
            self.basedir,
            list(self.includes_patterns.sources),
            list(self.excludes_patterns.sources),
        )
        try:
            self._scan_root(state)
        except TraversalIOError:
            logger.debug("Scan of %s failed, discarding partial results", self.basedir)
            raise
        self._state = state
        logger.debug("Fast scan of %s finished: %s", self.basedir, state.counts())

    def _scan_root(self, state: ScanState) -> None:
        if self.is_included(""):
            if not self.is_excluded(""):
                action = self._visit_directory("", self.basedir)
                if action in _STOP_ACTIONS or action is ScanAction.NO_RECURSE:
                    return
                state.dirs_included.append("")
            else:
                state.dirs_excluded.append("")
        else:
            state.dirs_not_included.append("")
        self._descend(self.basedir, "", True, state, set())

    def _descend(
        self, directory: Path, name: str, fast: bool, state: ScanState, ancestors: Set[FileIdentifier]
    ) -> ScanAction:
        """Walk ``directory`` unless it is already on the current path; return ABORT if the scan must stop."""
        identifier = None
        if self.follow_symlinks:
            identifier = FileIdentifier.for_path(directory)
            if identifier is not None:
                if identifier in ancestors:
                    logger.warning("Not descending into %s: symbolic link loop detected", directory)
                    return ScanAction.CONTINUE
                ancestors.add(identifier)

        prefix = name + os.sep if name else ""
        try:
            aborted = self._scandir(directory, prefix, fast, state, ancestors)
        finally:
            if identifier is not None:
                ancestors.discard(identifier)
        return ScanAction.ABORT if aborted else ScanAction.CONTINUE

    def _scandir(
        self, directory: Path, prefix: str, fast: bool, state: ScanState, ancestors: Set[FileIdentifier]
    ) -> bool:
        """Classify the entries of one directory. Returns True if the whole scan was aborted."""
        try:
            entries = sorted(os.listdir(directory))
        except OSError as e:
            raise TraversalIOError(str(directory), e) from e

        for entry in entries:
            name = prefix + entry
            path = directory / entry
            try:
                is_dir = path.is_dir()
                is_unfollowed_link = is_dir and not self.follow_symlinks and path.is_symlink()
                is_file = not is_dir and path.is_file()
            except OSError as e:
                raise TraversalIOError(str(path), e) from e

            if is_unfollowed_link:
                # Recorded as an included directory, never descended into
                state.dirs_included.append(name)
                continue
            if is_dir:
                action = self._scan_subdirectory(path, name, fast, state, ancestors)
            elif is_file:
                action = self._scan_file(path, name, state)
            else:
                # Broken links, sockets, devices
                continue

            if action is ScanAction.ABORT:
                return True
            if action is ScanAction.ABORT_DIRECTORY:
                return False
        return False

    def _scan_subdirectory(
        self, path: Path, name: str, fast: bool, state: ScanState, ancestors: Set[FileIdentifier]
    ) -> ScanAction:
        included = self.is_included(name)

        if included and not self.is_excluded(name):
            action = self._visit_directory(name, path)
            if action in _STOP_ACTIONS:
                return action
            if action is ScanAction.NO_RECURSE:
                return ScanAction.CONTINUE
            state.dirs_included.append(name)
            return self._descend(path, name, fast, state, ancestors)

        if included:
            state.dirs_excluded.append(name)
            if fast:
                if not self.could_hold_included(name):
                    logger.debug("Pruned excluded directory %s", name)
                    state.pruned_excluded.append(name)
                    return ScanAction.CONTINUE
                action = self._visit_directory(name, path)
                if action in _STOP_ACTIONS:
                    return action
                if action is ScanAction.NO_RECURSE:
                    return ScanAction.CONTINUE
            return self._descend(path, name, fast, state, ancestors)

        if fast:
            if not self.could_hold_included(name):
                logger.debug("Pruned directory %s", name)
                state.pruned_not_included.append(name)
                return ScanAction.CONTINUE
            action = self._visit_directory(name, path)
            if action in _STOP_ACTIONS:
                return action
            if action is ScanAction.NO_RECURSE:
                return ScanAction.CONTINUE
        state.dirs_not_included.append(name)
        return self._descend(path, name, fast, state, ancestors)

    def _scan_file(self, path: Path, name: str, state: ScanState) -> ScanAction:
        if not self.is_included(name):
            state.files_not_included.append(name)
        elif self.is_excluded(name):
            state.files_excluded.append(name)
        else:
            action = self._visit_file(name, path)
            if action in _STOP_ACTIONS:
                return action
            state.files_included.append(name)
        return ScanAction.CONTINUE

    def _visit_directory(self, name: str, path: Path) -> ScanAction:
        if self.scan_control is None:
            return ScanAction.CONTINUE
        action = self.scan_control.visit_directory(name, path)
        if action is not ScanAction.CONTINUE:
            logger.debug("Scan control answered %s for directory %r", action.name, name)
        return action

    def _visit_file(self, name: str, path: Path) -> ScanAction:
        if self.scan_control is None:
            return ScanAction.CONTINUE
        action = self.scan_control.visit_file(name, path)
        if action is not ScanAction.CONTINUE:
            logger.debug("Scan control answered %s for file %r", action.name, name)
        return action

    def _complete_slow_scan(self) -> None:
        """Walk the subtrees the fast scan skipped. Runs at most once per scan."""
        state = self._state
        if state is None or state.slow_scan_complete:
            return

        logger.debug(
            "Completing scan of %s: %d pruned subtree(s)",
            self.basedir,
            len(state.pruned_excluded) + len(state.pruned_not_included),
        )
        try:
            for name in state.pruned_excluded:
                self._descend(self.basedir / name, name, False, state, self._ancestor_identifiers(name))
            for name in state.pruned_not_included:
                state.dirs_not_included.append(name)
                self._descend(self.basedir / name, name, False, state, self._ancestor_identifiers(name))
        except BaseException:
            logger.debug("Completing scan of %s failed, discarding results", self.basedir)
            self._state = None
            raise
        state.slow_scan_complete = True
        logger.debug("Slow scan of %s finished: %s", self.basedir, state.counts())

    def _ancestor_identifiers(self, name: str) -> Set[FileIdentifier]:
        """Identifiers of the base directory and every directory above ``name``."""
        ancestors: Set[FileIdentifier] = set()
        if not self.follow_symlinks:
            return ancestors
        current = self.basedir
        for part in [""] + name.split(os.sep)[:-1]:
            current = current / part if part else current
            identifier = FileIdentifier.for_path(current)
            if identifier is not None:
                ancestors.add(identifier)
        return ancestors

    def get_included_files(self) -> List[str]:
        """Files matching an include pattern and no exclude pattern.

        Complete after the fast scan; never triggers the slow scan.
        """
        return list(self._state.files_included) if self._state is not None else []

    def get_included_directories(self) -> List[str]:
        """Directories matching an include pattern and no exclude pattern (``""`` is the root)."""
        return list(self._state.dirs_included) if self._state is not None else []

    def get_not_included_files(self) -> List[str]:
        """Files matching no include pattern. Completes the slow scan first."""
        self._complete_slow_scan()
        return list(self._state.files_not_included) if self._state is not None else []

    def get_not_included_directories(self) -> List[str]:
        """Directories matching no include pattern. Completes the slow scan first."""
        self._complete_slow_scan()
        return list(self._state.dirs_not_included) if self._state is not None else []

    def get_excluded_files(self) -> List[str]:
        """Files matching an include and an exclude pattern. Completes the slow scan first."""
        self._complete_slow_scan()
        return list(self._state.files_excluded) if self._state is not None else []

    def get_excluded_directories(self) -> List[str]:
        """Directories matching an include and an exclude pattern. Completes the slow scan first."""
        self._complete_slow_scan()
        return list(self._state.dirs_excluded) if self._state is not None else []

    def diff_included_files(self, old_files: Optional[Sequence[str]]) -> ScanDiff:
        """Compare a previous list of included files with the current scan.

        A scan is performed first if none has completed yet.

        Args:
            old_files: Included files of an earlier scan.

        Returns:
            ScanDiff of paths added since and removed since ``old_files``.
        """
        if self._state is None:
            self.scan()
        return diff_files(old_files, self.get_included_files())
