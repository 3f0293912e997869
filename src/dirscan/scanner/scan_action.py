"""Scan action enum returned by traversal controls."""

from enum import Enum


class ScanAction(str, Enum):
    """Action a ScanControl asks the scanner to take after visiting an entry.

    Values:
        CONTINUE: Record the entry and carry on with the next one
        ABORT: Stop the whole scan; the current entry is not recorded
        ABORT_DIRECTORY: Stop visiting the remaining entries of the current directory;
            the current entry is not recorded and the scan resumes in the parent
        NO_RECURSE: Directories only. Do not record the directory and do not descend into it
    """

    CONTINUE = "continue"
    ABORT = "abort"
    ABORT_DIRECTORY = "abort_directory"
    NO_RECURSE = "no_recurse"
