"""Command-line interface for dirscan.

This module provides the ``dirscan`` command, which classifies the contents of a
directory against include and exclude patterns and prints one of the resulting
selections as a flat listing, as a tree, or as a diff against an earlier listing.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g., when piping to `head`) on Unix-like systems
    - SIGINT: Handled for clean exit on Ctrl+C

Exit Codes:
    0: Successful completion
    1: Runtime, configuration or pattern error
    2: Command-line syntax error
    126: Permission denied while traversing
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Python sources, skipping version control metadata
    $ dirscan -D -i "**/*.py" /path/to/project

    # What did the excludes remove?
    $ dirscan -x "**/build/**" -s excluded /path/to/project
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, List

from dirscan.cli.argparser import create_parser, validate_args
from dirscan.cli.safe_writer import SafeWriter
from dirscan.cli.signal_handler import setup_signal_handling, signal_handler
from dirscan.exceptions import TraversalIOError
from dirscan.scanner import DirectoryScanner
from dirscan.tree import build_tree, stream_tree_representation


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_scanner(args: argparse.Namespace) -> DirectoryScanner:
    """Map parsed arguments onto a DirectoryScanner."""
    return DirectoryScanner(
        args.directory,
        includes=args.includes,
        excludes=args.excludes,
        case_sensitive=not args.ignore_case,
        follow_symlinks=not args.no_follow_symlinks,
        default_excludes=args.default_excludes,
    )


def select_paths(scanner: DirectoryScanner, selection: str, directories: bool) -> List[str]:
    """Return the sorted paths of one classification of a completed scan.

    The root directory (the empty name) is left out.
    """
    getters = {
        ("included", False): scanner.get_included_files,
        ("included", True): scanner.get_included_directories,
        ("excluded", False): scanner.get_excluded_files,
        ("excluded", True): scanner.get_excluded_directories,
        ("not-included", False): scanner.get_not_included_files,
        ("not-included", True): scanner.get_not_included_directories,
    }
    return sorted(path for path in getters[(selection, directories)]() if path)


def read_listing(path: Path) -> List[str]:
    """Read a previous listing, one relative path per line."""
    with open(path, "r") as f:
        return [line.rstrip("\r\n") for line in f if line.strip()]


def render_output(scanner: DirectoryScanner, args: argparse.Namespace) -> Iterator[str]:
    """Generate the output lines requested by ``args`` for a completed scan."""
    if args.diff is not None:
        diff = scanner.diff_included_files(read_listing(args.diff))
        for path in sorted(diff.removed):
            yield f"- {path}"
        for path in sorted(diff.added):
            yield f"+ {path}"
        return

    paths = select_paths(scanner, args.select, args.directories)
    if args.tree:
        if args.directories:
            root = build_tree(scanner.basedir.name or str(scanner.basedir), (), paths)
        else:
            root = build_tree(scanner.basedir.name or str(scanner.basedir), paths)
        yield from stream_tree_representation(root)
    else:
        yield from paths


def main() -> None:
    """Main entry point for the dirscan command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime, configuration or pattern error
        2: Command-line syntax error
        126: Permission denied while traversing
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
        args = parser.parse_args()
        validate_args(args)
        configure_logging(args.verbose)

        scanner = build_scanner(args)
        try:
            scanner.scan()
            sys.stdout.flush()
            with SafeWriter(sys.stdout.fileno()) as writer:
                try:
                    for line in render_output(scanner, args):
                        writer.write_line(line)
                except BrokenPipeError:
                    pass
        except TraversalIOError as e:
            print(f"Error: {str(e)}", file=sys.stderr)
            sys.exit(126 if e.is_permission_error else 1)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
