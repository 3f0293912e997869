from typing import Optional


class DirScanError(Exception):
    """Base class for every error raised by dirscan."""


class ConfigurationError(DirScanError, ValueError):
    """
    Exception raised when a scanner is configured with an unusable base directory.

    This exception is raised by ``DirectoryScanner.scan()`` before any traversal
    starts, when the base directory does not exist or is not a directory.

    Example:
        >>> error = ConfigurationError("basedir /nowhere does not exist")
        >>> str(error)
        'basedir /nowhere does not exist'
        >>> isinstance(error, ValueError)
        True
    """

    pass


class PatternError(DirScanError, ValueError):
    """
    Exception raised when an include or exclude pattern cannot be compiled.

    This covers a malformed regular expression inside a ``%regex[...]`` wrapper
    and a ``None`` element inside a pattern list. It is raised while the pattern
    set is built, so no traversal happens with a broken configuration.

    Attributes:
        pattern (Optional[str]): The offending raw pattern, when there is one.

    Example:
        >>> error = PatternError("Invalid regular expression", pattern="%regex[(]")
        >>> error.pattern
        '%regex[(]'
    """

    def __init__(self, message: str, pattern: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message (str): Description of the problem.
            pattern (Optional[str]): The raw pattern that failed to compile.
        """
        self.pattern = pattern
        super().__init__(message)


class TraversalIOError(DirScanError, OSError):
    """
    Exception raised when a directory cannot be read in the middle of a scan.

    The scan is aborted and any partially collected results are discarded. The
    underlying ``OSError`` is chained as ``__cause__`` and kept in ``original``.

    Attributes:
        path (str): The directory that could not be listed.
        original (OSError): The error reported by the operating system.

    Example:
        >>> cause = PermissionError(13, "Permission denied")
        >>> error = TraversalIOError("/data/private", cause)
        >>> str(error)
        'IO error scanning directory /data/private: [Errno 13] Permission denied'
        >>> error.is_permission_error
        True
    """

    def __init__(self, path: str, original: OSError) -> None:
        """
        Initialize the exception with the failing directory and the original error.

        Args:
            path (str): Directory whose listing failed.
            original (OSError): The error raised while listing it.
        """
        self.path = path
        self.original = original
        super().__init__(f"IO error scanning directory {path}: {original}")

    @property
    def is_permission_error(self) -> bool:
        """True if the underlying failure was an access denial."""
        return isinstance(self.original, PermissionError)
