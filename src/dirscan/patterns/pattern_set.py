"""Ordered collections of patterns combined with logical OR."""

import os
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from dirscan.exceptions import PatternError

from . import selector
from .pattern import Pattern


def normalize_pattern(raw: str, separator: str = os.sep) -> str:
    """Normalize a user supplied pattern string.

    Surrounding whitespace is removed, both ``/`` and ``\\`` become ``separator``, and a
    pattern ending in a separator gets ``**`` appended so that it selects everything
    below that directory. Wrapped patterns (``%regex[...]``, ``%ant[...]``) are only
    stripped of whitespace.

    Example:
        >>> normalize_pattern(" build/ ", "/")
        'build/**'
        >>> normalize_pattern("src\\\\main\\\\*.py", "/")
        'src/main/*.py'
    """
    pattern = raw.strip()
    if selector.is_regex_prefixed_pattern(pattern) or selector.is_ant_prefixed_pattern(pattern):
        return pattern
    pattern = pattern.replace("/", separator).replace("\\", separator)
    if pattern.endswith(separator):
        pattern += selector.DEEP_WILDCARD
    return pattern


class PatternSet:
    """An ordered list of patterns that matches when any member matches.

    Order never changes the result; there is no "most specific pattern wins" rule.
    It only changes how soon a match is found.

    Attributes:
        patterns (Tuple[Pattern, ...]): The compiled members, in order.
        separator (str): Separator shared by all members.

    Example:
        >>> includes = PatternSet.from_strings(["**/*.py", "docs/"], separator="/")
        >>> includes.match("pkg/mod.py")
        True
        >>> includes.match("docs/index.md")
        True
        >>> includes.match("README.md")
        False
        >>> includes.matches_any_prefix("docs")
        True
    """

    def __init__(self, patterns: Iterable[Pattern], separator: str = os.sep) -> None:
        self.patterns: Tuple[Pattern, ...] = tuple(patterns)
        self.separator = separator

    @classmethod
    def from_strings(
        cls, sources: Sequence[Optional[str]], separator: str = os.sep, kind: str = "patterns"
    ) -> "PatternSet":
        """Normalize and compile a list of raw pattern strings.

        Args:
            sources: Raw patterns in order.
            separator: Path separator used for tokenization.
            kind: Name of the list, used in error messages (e.g. "includes").

        Returns:
            A new PatternSet.

        Raises:
            PatternError: If an element is None or a regex pattern is malformed.
        """
        compiled: List[Pattern] = []
        for source in sources:
            if source is None:
                raise PatternError(f"If a non-null {kind} list is given, all elements must be non-null")
            compiled.append(Pattern(normalize_pattern(source, separator), separator))
        return cls(compiled, separator)

    @property
    def sources(self) -> Tuple[str, ...]:
        return tuple(pattern.raw for pattern in self.patterns)

    def match(self, candidate: str, case_sensitive: bool = True) -> bool:
        """True if any member matches ``candidate`` completely.

        The candidate is tokenized once and the segments are shared by all members.
        """
        segments = selector.tokenize_path(candidate, self.separator)
        return any(pattern.match_tokenized(candidate, segments, case_sensitive) for pattern in self.patterns)

    def matches_any_prefix(self, candidate: str, case_sensitive: bool = True) -> bool:
        """True if any member could still match a path below ``candidate``."""
        return any(pattern.match_prefix(candidate, case_sensitive) for pattern in self.patterns)

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def __repr__(self) -> str:
        return f"PatternSet({list(self.sources)!r})"
