"""Command-line argument parsing for dirscan.

This module defines the command-line interface for dirscan,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from dirscan import __version__

SELECTIONS = ("included", "excluded", "not-included")


def read_pattern_file(path: Union[str, Path]) -> List[str]:
    """Read patterns from a file, one per line.

    Blank lines and lines starting with ``#`` are skipped.

    Args:
        path: File to read.

    Returns:
        The patterns in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Pattern file not found: {path}")
    with open(path, "r") as f:
        lines = f.read().splitlines()
    return [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]


def create_pattern_action(dest: str) -> Type[argparse.Action]:
    """Create a custom action class collecting patterns into one list.

    Patterns given directly and patterns read from files end up in the same list
    on the namespace, in the exact order they appear on the command line.

    Args:
        dest: Namespace attribute receiving the patterns ("includes" or "excludes").

    Returns:
        A custom action class for use with argparse.
    """

    class PatternListAction(argparse.Action):
        """Action appending patterns, or the patterns of a file, as arguments are processed."""

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return
            if getattr(namespace, dest, None) is None:
                setattr(namespace, dest, [])
            patterns = getattr(namespace, dest)

            if option_string is not None and option_string.endswith("-from"):
                try:
                    patterns.extend(read_pattern_file(str(values)))
                except OSError as e:
                    parser.error(str(e))
            else:
                patterns.append(str(values))

    return PatternListAction


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with dirscan's options.
    """
    description = """
    dirscan: Select files and directories of a tree with glob include/exclude patterns.

    Every entry below DIRECTORY is classified by its relative path:
    - included: matches an include pattern and no exclude pattern
    - excluded: matches an include pattern and an exclude pattern
    - not-included: matches no include pattern

    Pattern syntax:
    - '*' and '?' match within one path segment
    - '**' as a whole segment matches any number of segments, including none
    - a trailing '/' means everything below that directory ('build/' is 'build/**')
    - '%regex[...]' matches the whole relative path with a regular expression
    - '%ant[...]' is an explicit glob
    """

    epilog = """
    Examples:
      # List every file
      dirscan /path/to/project

      # Python sources outside of tests
      dirscan -i "**/*.py" -x "**/tests/**" /path/to/project

      # Patterns from files, mixed with direct patterns in command line order
      dirscan --include-from includes.txt -x "**/*.tmp" /path/to/project

      # Skip version control metadata and editor backups
      dirscan -D /path/to/project

      # Show what the excludes removed, as a tree
      dirscan -x "**/*.log" -s excluded -t /path/to/project

      # Compare against an earlier listing
      dirscan /path/to/project > before.txt
      dirscan --diff before.txt /path/to/project
    """

    parser = argparse.ArgumentParser(
        prog="dirscan",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dirscan {__version__}", help="Show the version and exit"
    )

    IncludeAction = create_pattern_action("includes")
    ExcludeAction = create_pattern_action("excludes")

    parser.add_argument(
        "directory",
        type=Path,
        help="The directory to scan. All paths in the output are relative to this directory.",
    )
    parser.add_argument(
        "-i",
        "--include",
        dest="includes",
        metavar="PATTERN",
        action=IncludeAction,
        help="Include pattern (can be specified multiple times). Defaults to '**'.",
    )
    parser.add_argument(
        "--include-from",
        dest="includes",
        metavar="FILE",
        action=IncludeAction,
        help="Read include patterns from FILE, one per line.",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        dest="excludes",
        metavar="PATTERN",
        action=ExcludeAction,
        help="Exclude pattern (can be specified multiple times).",
    )
    parser.add_argument(
        "--exclude-from",
        dest="excludes",
        metavar="FILE",
        action=ExcludeAction,
        help="Read exclude patterns from FILE, one per line.",
    )
    parser.add_argument(
        "-D",
        "--default-excludes",
        action="store_true",
        help="Also exclude version control metadata, OS metadata files and editor backups.",
    )
    parser.add_argument(
        "-I",
        "--ignore-case",
        action="store_true",
        help="Match patterns case-insensitively.",
    )
    parser.add_argument(
        "-N",
        "--no-follow-symlinks",
        action="store_true",
        help="Do not walk symbolic links to directories; list them as included directories instead.",
    )
    parser.add_argument(
        "-s",
        "--select",
        choices=SELECTIONS,
        default="included",
        help="Which classification to print (default: included).",
    )
    parser.add_argument(
        "-d",
        "--directories",
        action="store_true",
        help="Print directories instead of files.",
    )
    parser.add_argument(
        "-t",
        "--tree",
        action="store_true",
        help="Print the selection as a tree instead of a flat list.",
    )
    parser.add_argument(
        "--diff",
        type=Path,
        metavar="FILE",
        help="Compare the included files against an earlier listing (one path per line) and print '+'/'-' lines.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log scan progress to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.diff is not None:
        if args.tree:
            raise ValueError("--diff cannot be combined with -t/--tree")
        if args.select != "included" or args.directories:
            raise ValueError("--diff compares included files only; drop -s/--select and -d/--directories")
        if not args.diff.is_file():
            raise ValueError(f"Listing file not found: {args.diff}")
