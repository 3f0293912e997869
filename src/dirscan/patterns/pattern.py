"""A single compiled include or exclude pattern."""

import os
import re
from typing import Optional, Sequence, Tuple

from dirscan.exceptions import PatternError

from . import selector


class Pattern:
    """A raw pattern string compiled once into a reusable matcher.

    Glob patterns are tokenized on the separator at construction time and the
    segments are reused for every candidate. A pattern wrapped as ``%regex[...]``
    is compiled with ``re`` instead and always matches against the whole
    candidate string. A ``%ant[...]`` wrapper is stripped and the inner text is
    compiled as a glob.

    Case sensitivity is not a property of the pattern; it is chosen per call.

    Attributes:
        source (str): Glob text after wrapper removal (the regex text for regex patterns).
        separator (str): Path separator used for tokenization.
        segments (Tuple[str, ...]): Tokenized glob. Empty for regex patterns.
        regex (Optional[re.Pattern]): Compiled expression for ``%regex[...]`` patterns.

    Example:
        >>> pattern = Pattern("src/**/*.py", separator="/")
        >>> pattern.segments
        ('src', '**', '*.py')
        >>> pattern.match("src/a/b/c.py")
        True
        >>> pattern.match("SRC/c.py", case_sensitive=False)
        True
        >>> pattern.match_prefix("src/a")
        True
        >>> pattern.match_prefix("test")
        False
    """

    def __init__(self, raw: str, separator: str = os.sep) -> None:
        """Compile a raw pattern.

        Args:
            raw: Pattern text, optionally wrapped in ``%regex[...]`` or ``%ant[...]``.
            separator: Path separator. Defaults to the platform separator.

        Raises:
            PatternError: If a ``%regex[...]`` body is not a valid regular expression.
        """
        self.raw = raw
        self.separator = separator
        self.regex: Optional[re.Pattern[str]] = None

        if selector.is_regex_prefixed_pattern(raw):
            self.source = selector.strip_wrapper(raw, selector.REGEX_HANDLER_PREFIX)
            try:
                self.regex = re.compile(self.source)
            except re.error as e:
                raise PatternError(f"Invalid regular expression in pattern '{raw}': {e}", pattern=raw) from e
            self.segments: Tuple[str, ...] = ()
        else:
            if selector.is_ant_prefixed_pattern(raw):
                self.source = selector.strip_wrapper(raw, selector.ANT_HANDLER_PREFIX)
            else:
                self.source = raw
            self.segments = tuple(selector.tokenize_path(self.source, separator))

    @property
    def is_regex(self) -> bool:
        return self.regex is not None

    def match(self, candidate: str, case_sensitive: bool = True) -> bool:
        """Check whether ``candidate`` matches this pattern completely.

        Args:
            candidate: Path relative to the scan root, using ``separator``.
            case_sensitive: Whether comparison is case sensitive. Ignored for regex patterns.

        Returns:
            True on a full match.
        """
        return self.match_tokenized(candidate, selector.tokenize_path(candidate, self.separator), case_sensitive)

    def match_tokenized(self, candidate: str, candidate_segments: Sequence[str], case_sensitive: bool = True) -> bool:
        """Like ``match`` but reuses segments the caller already tokenized."""
        if self.regex is not None:
            return self.regex.fullmatch(candidate) is not None
        if selector.separator_start_mismatch(self.source, candidate, self.separator):
            return False
        return selector.match_segments(self.segments, candidate_segments, case_sensitive)

    def match_prefix(self, candidate: str, case_sensitive: bool = True) -> bool:
        """Check whether ``candidate`` could still be extended into a match.

        Used to decide whether a directory can be skipped. The answer may be a false
        positive but never a false negative. Regex patterns always answer True since
        a partial regular expression match cannot be decided.

        Args:
            candidate: Directory path relative to the scan root.
            case_sensitive: Whether comparison is case sensitive.

        Returns:
            False only if no path below ``candidate`` can match.
        """
        if self.regex is not None:
            return True
        if not selector.separator_start_mismatch(self.source, candidate, self.separator):
            candidate_segments = selector.tokenize_path(candidate, self.separator)
            if selector.match_segments_start(self.segments, candidate_segments, case_sensitive):
                return True
        if self.separator != "/":
            return self._match_prefix_with(
                self.source.replace("\\", "/"), candidate.replace("\\", "/"), "/", case_sensitive
            )
        return False

    @staticmethod
    def _match_prefix_with(source: str, candidate: str, separator: str, case_sensitive: bool) -> bool:
        if selector.separator_start_mismatch(source, candidate, separator):
            return False
        return selector.match_segments_start(
            selector.tokenize_path(source, separator), selector.tokenize_path(candidate, separator), case_sensitive
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self.raw == other.raw and self.separator == other.separator

    def __hash__(self) -> int:
        return hash((self.raw, self.separator))

    def __repr__(self) -> str:
        return f"Pattern({self.raw!r})"
