"""Low-level glob matching for path segments and tokenized paths.

The functions here work on plain strings and lists of segments. ``Pattern`` and
``PatternSet`` build on them and cache the tokenized form of each pattern so that
the work done per candidate is limited to tokenizing the candidate once.

Glob grammar:
    - ``?`` matches exactly one character inside a segment
    - ``*`` matches zero or more characters inside a segment
    - ``**`` as a whole segment matches zero or more segments

Two wrappers may surround a raw pattern:
    - ``%regex[...]``: the inner text is a regular expression matched against the
      whole candidate
    - ``%ant[...]``: the inner text is a glob (the wrapper is only stripped)
"""

import os
import re
from typing import List, Sequence

PATTERN_HANDLER_PREFIX = "["
PATTERN_HANDLER_SUFFIX = "]"
REGEX_HANDLER_PREFIX = "%regex" + PATTERN_HANDLER_PREFIX
ANT_HANDLER_PREFIX = "%ant" + PATTERN_HANDLER_PREFIX

DEEP_WILDCARD = "**"


def is_regex_prefixed_pattern(pattern: str) -> bool:
    """Check whether ``pattern`` is wrapped as ``%regex[...]``.

    Example:
        >>> is_regex_prefixed_pattern("%regex[.*\\\\.txt]")
        True
        >>> is_regex_prefixed_pattern("%regex[]")
        False
    """
    return _is_wrapped(pattern, REGEX_HANDLER_PREFIX)


def is_ant_prefixed_pattern(pattern: str) -> bool:
    """Check whether ``pattern`` is wrapped as ``%ant[...]``."""
    return _is_wrapped(pattern, ANT_HANDLER_PREFIX)


def _is_wrapped(pattern: str, prefix: str) -> bool:
    # The inner text must hold at least two characters for the wrapper to count
    return (
        len(pattern) > len(prefix) + len(PATTERN_HANDLER_SUFFIX) + 1
        and pattern.startswith(prefix)
        and pattern.endswith(PATTERN_HANDLER_SUFFIX)
    )


def strip_wrapper(pattern: str, prefix: str) -> str:
    """Return the text between ``prefix`` and the closing bracket."""
    return pattern[len(prefix) : len(pattern) - len(PATTERN_HANDLER_SUFFIX)]


def tokenize_path(path: str, separator: str = os.sep) -> List[str]:
    """Split a path into its non-empty segments.

    Runs of separators and leading or trailing separators produce no empty
    segments.

    Example:
        >>> tokenize_path("/a//b/c/", "/")
        ['a', 'b', 'c']
        >>> tokenize_path("", "/")
        []
    """
    return [segment for segment in path.split(separator) if segment]


def _chars_equal(c1: str, c2: str, case_sensitive: bool) -> bool:
    if c1 == c2:
        return True
    if not case_sensitive:
        return c1.upper() == c2.upper() or c1.lower() == c2.lower()
    return False


def _run_matches_at(pattern: str, start: int, text: str, offset: int, length: int, case_sensitive: bool) -> bool:
    for j in range(length):
        ch = pattern[start + j]
        if ch != "?" and not _chars_equal(ch, text[offset + j], case_sensitive):
            return False
    return True


def match_segment(pattern: str, text: str, case_sensitive: bool = True) -> bool:
    """Match one path segment against a segment pattern containing ``*`` and ``?``.

    The fixed parts before the first star and after the last star are anchored
    to the ends of ``text``. The literal runs between stars are then located left
    to right, each by a single forward scan, so no backtracking is needed.

    Args:
        pattern: Segment pattern. Must not contain the path separator.
        text: Segment to test.
        case_sensitive: Whether character comparison is case sensitive.

    Returns:
        True if ``text`` matches ``pattern`` completely.

    Example:
        >>> match_segment("*.txt", "notes.txt")
        True
        >>> match_segment("a?c", "abc")
        True
        >>> match_segment("a*b*c", "axxbyyc")
        True
        >>> match_segment("*.TXT", "notes.txt", case_sensitive=False)
        True
    """
    if "*" not in pattern:
        if len(pattern) != len(text):
            return False
        return _run_matches_at(pattern, 0, text, 0, len(pattern), case_sensitive)

    if pattern == "*":
        return True

    pat_start, pat_end = 0, len(pattern) - 1
    str_start, str_end = 0, len(text) - 1

    # Characters before the first star
    while pattern[pat_start] != "*" and str_start <= str_end:
        ch = pattern[pat_start]
        if ch != "?" and not _chars_equal(ch, text[str_start], case_sensitive):
            return False
        pat_start += 1
        str_start += 1
    if str_start > str_end:
        return _only_stars(pattern, pat_start, pat_end)

    # Characters after the last star
    while pattern[pat_end] != "*" and str_start <= str_end:
        ch = pattern[pat_end]
        if ch != "?" and not _chars_equal(ch, text[str_end], case_sensitive):
            return False
        pat_end -= 1
        str_end -= 1
    if str_start > str_end:
        return _only_stars(pattern, pat_start, pat_end)

    # pat_start and pat_end both point at a star from here on
    while pat_start != pat_end and str_start <= str_end:
        next_star = pattern.index("*", pat_start + 1)
        if next_star == pat_start + 1:
            pat_start += 1
            continue
        run_length = next_star - pat_start - 1
        remaining = str_end - str_start + 1
        found = -1
        for i in range(remaining - run_length + 1):
            if _run_matches_at(pattern, pat_start + 1, text, str_start + i, run_length, case_sensitive):
                found = str_start + i
                break
        if found == -1:
            return False
        pat_start = next_star
        str_start = found + run_length

    return _only_stars(pattern, pat_start, pat_end)


def _only_stars(pattern: str, start: int, end: int) -> bool:
    return all(pattern[i] == "*" for i in range(start, end + 1))


def _only_deep_wildcards(segments: Sequence[str], start: int, end: int) -> bool:
    return all(segments[i] == DEEP_WILDCARD for i in range(start, end + 1))


def match_segments(pattern_dirs: Sequence[str], str_dirs: Sequence[str], case_sensitive: bool = True) -> bool:
    """Match a tokenized candidate path against a tokenized glob pattern.

    ``**`` segments match any number of candidate segments, including none.

    Args:
        pattern_dirs: Pattern segments.
        str_dirs: Candidate path segments.
        case_sensitive: Whether segment comparison is case sensitive.

    Returns:
        True if the whole candidate matches the whole pattern.

    Example:
        >>> match_segments(["a", "**", "b"], ["a", "b"])
        True
        >>> match_segments(["**", "*.txt"], ["x", "y", "z.txt"])
        True
        >>> match_segments(["a", "*"], ["a", "b", "c"])
        False
    """
    pat_start, pat_end = 0, len(pattern_dirs) - 1
    str_start, str_end = 0, len(str_dirs) - 1

    # Up to the first '**'
    while pat_start <= pat_end and str_start <= str_end:
        pat_dir = pattern_dirs[pat_start]
        if pat_dir == DEEP_WILDCARD:
            break
        if not match_segment(pat_dir, str_dirs[str_start], case_sensitive):
            return False
        pat_start += 1
        str_start += 1

    if str_start > str_end:
        return _only_deep_wildcards(pattern_dirs, pat_start, pat_end)
    if pat_start > pat_end:
        return False

    # Back to the last '**'
    while pat_start <= pat_end and str_start <= str_end:
        pat_dir = pattern_dirs[pat_end]
        if pat_dir == DEEP_WILDCARD:
            break
        if not match_segment(pat_dir, str_dirs[str_end], case_sensitive):
            return False
        pat_end -= 1
        str_end -= 1

    if str_start > str_end:
        return _only_deep_wildcards(pattern_dirs, pat_start, pat_end)

    # Place each run of literal segments found between '**' markers
    while pat_start != pat_end and str_start <= str_end:
        next_deep = pat_start + 1
        while pattern_dirs[next_deep] != DEEP_WILDCARD:
            next_deep += 1
        if next_deep == pat_start + 1:
            # '**/**'
            pat_start += 1
            continue
        run_length = next_deep - pat_start - 1
        remaining = str_end - str_start + 1
        found = -1
        for i in range(remaining - run_length + 1):
            if all(
                match_segment(pattern_dirs[pat_start + j + 1], str_dirs[str_start + i + j], case_sensitive)
                for j in range(run_length)
            ):
                found = str_start + i
                break
        if found == -1:
            return False
        pat_start = next_deep
        str_start = found + run_length

    return _only_deep_wildcards(pattern_dirs, pat_start, pat_end)


def match_segments_start(pattern_dirs: Sequence[str], str_dirs: Sequence[str], case_sensitive: bool = True) -> bool:
    """Check whether a tokenized candidate could be extended into a match.

    Only the segments before the first ``**`` are compared. The answer may be a
    false positive but never a false negative, which makes it safe for deciding
    whether a directory may be skipped.

    Example:
        >>> match_segments_start(["src", "main", "*.py"], ["src"])
        True
        >>> match_segments_start(["src", "**"], ["src", "a", "b"])
        True
        >>> match_segments_start(["src", "*.py"], ["test"])
        False
    """
    pat_start, pat_end = 0, len(pattern_dirs) - 1
    str_start, str_end = 0, len(str_dirs) - 1

    while pat_start <= pat_end and str_start <= str_end:
        pat_dir = pattern_dirs[pat_start]
        if pat_dir == DEEP_WILDCARD:
            break
        if not match_segment(pat_dir, str_dirs[str_start], case_sensitive):
            return False
        pat_start += 1
        str_start += 1

    return str_start > str_end or pat_start <= pat_end


def separator_start_mismatch(pattern: str, text: str, separator: str) -> bool:
    """True when exactly one of ``pattern`` and ``text`` is rooted at ``separator``."""
    return text.startswith(separator) != pattern.startswith(separator)


def match_path(pattern: str, text: str, case_sensitive: bool = True, separator: str = os.sep) -> bool:
    """Match a candidate path against a raw pattern string.

    This is the uncached form of ``Pattern.match``: wrappers are interpreted and the
    pattern is tokenized on every call.

    Example:
        >>> match_path("src/**/*.py", "src/pkg/mod.py", separator="/")
        True
        >>> match_path("%regex[.*\\\\.py]", "src/pkg/mod.py", separator="/")
        True
        >>> match_path("%ant[*.py]", "mod.py", separator="/")
        True
    """
    if is_regex_prefixed_pattern(pattern):
        return re.fullmatch(strip_wrapper(pattern, REGEX_HANDLER_PREFIX), text) is not None
    if is_ant_prefixed_pattern(pattern):
        pattern = strip_wrapper(pattern, ANT_HANDLER_PREFIX)
    if separator_start_mismatch(pattern, text, separator):
        return False
    return match_segments(tokenize_path(pattern, separator), tokenize_path(text, separator), case_sensitive)


def match_path_start(pattern: str, text: str, case_sensitive: bool = True) -> bool:
    """Check whether ``text`` could be the start of a path matching ``pattern``.

    Both strings are normalized to ``/`` before comparison. Regex wrapped patterns
    always answer True because a partial regex match cannot be decided.

    Example:
        >>> match_path_start("%ant[aaa]", "")
        True
        >>> match_path_start("%ant[/aaa]", "")
        False
        >>> match_path_start("/aaa/**", "\\\\aaa\\\\bbb")
        True
    """
    if is_regex_prefixed_pattern(pattern):
        return True
    if is_ant_prefixed_pattern(pattern):
        pattern = strip_wrapper(pattern, ANT_HANDLER_PREFIX)
    alt_pattern = pattern.replace("\\", "/")
    alt_text = text.replace("\\", "/")
    if separator_start_mismatch(alt_pattern, alt_text, "/"):
        return False
    return match_segments_start(tokenize_path(alt_pattern, "/"), tokenize_path(alt_text, "/"), case_sensitive)
