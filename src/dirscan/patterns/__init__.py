"""Glob pattern compilation and matching."""

from .defaults import DEFAULT_EXCLUDES
from .pattern import Pattern
from .pattern_set import PatternSet, normalize_pattern
from .selector import match_path, match_path_start

__all__ = [
    "DEFAULT_EXCLUDES",
    "Pattern",
    "PatternSet",
    "match_path",
    "match_path_start",
    "normalize_pattern",
]
