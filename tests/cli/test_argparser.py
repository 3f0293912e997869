"""Unit tests for the argument parser module in the dirscan CLI."""

import argparse
from pathlib import Path

import pytest

from dirscan.cli.argparser import create_parser, create_pattern_action, read_pattern_file, validate_args


@pytest.fixture
def parser():
    return create_parser()


@pytest.fixture
def pattern_file(tmp_path):
    path = tmp_path / "patterns.txt"
    path.write_text("# build output\nbuild/\n\n   **/*.pyc  \n#*.log\n")
    return path


def test_read_pattern_file(pattern_file):
    assert read_pattern_file(pattern_file) == ["build/", "**/*.pyc"]


def test_read_missing_pattern_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Pattern file not found"):
        read_pattern_file(tmp_path / "missing.txt")


def test_create_pattern_action():
    PatternAction = create_pattern_action("includes")
    assert issubclass(PatternAction, argparse.Action)

    action = PatternAction(option_strings=["-i", "--include"], dest="includes", help="test help")
    namespace = argparse.Namespace(includes=None)
    action(argparse.ArgumentParser(), namespace, "**/*.py", "-i")
    action(argparse.ArgumentParser(), namespace, "docs/", "--include")
    assert namespace.includes == ["**/*.py", "docs/"]


def test_defaults(parser):
    args = parser.parse_args(["some/dir"])
    assert args.directory == Path("some/dir")
    assert args.includes is None
    assert args.excludes is None
    assert args.select == "included"
    assert not args.directories
    assert not args.tree
    assert args.diff is None
    assert not args.default_excludes
    assert not args.ignore_case
    assert not args.no_follow_symlinks
    assert not args.verbose


def test_patterns_keep_command_line_order(parser, pattern_file):
    args = parser.parse_args(
        ["-x", "first", "--exclude-from", str(pattern_file), "--exclude", "last", "-i", "**/*.py", "dir"]
    )
    assert args.excludes == ["first", "build/", "**/*.pyc", "last"]
    assert args.includes == ["**/*.py"]


def test_include_from_file(parser, pattern_file):
    args = parser.parse_args(["--include-from", str(pattern_file), "dir"])
    assert args.includes == ["build/", "**/*.pyc"]


def test_missing_pattern_file_is_usage_error(parser, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--exclude-from", str(tmp_path / "missing.txt"), "dir"])
    assert exc_info.value.code == 2
    assert "Pattern file not found" in capsys.readouterr().err


def test_flags(parser):
    args = parser.parse_args(["-D", "-I", "-N", "-s", "not-included", "-d", "-t", "-v", "dir"])
    assert args.default_excludes
    assert args.ignore_case
    assert args.no_follow_symlinks
    assert args.select == "not-included"
    assert args.directories
    assert args.tree
    assert args.verbose


def test_invalid_selection(parser, capsys):
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["-s", "everything", "dir"])
    assert exc_info.value.code == 2


def test_version(parser, capsys):
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0
    assert capsys.readouterr().out.startswith("dirscan ")


def test_validate_args_accepts_plain_listing(parser):
    validate_args(parser.parse_args(["dir"]))


def test_validate_args_diff_with_tree(parser, tmp_path):
    listing = tmp_path / "listing.txt"
    listing.write_text("a.txt\n")
    with pytest.raises(ValueError, match="cannot be combined"):
        validate_args(parser.parse_args(["--diff", str(listing), "-t", "dir"]))


def test_validate_args_diff_with_selection(parser, tmp_path):
    listing = tmp_path / "listing.txt"
    listing.write_text("a.txt\n")
    with pytest.raises(ValueError, match="included files only"):
        validate_args(parser.parse_args(["--diff", str(listing), "-s", "excluded", "dir"]))
    with pytest.raises(ValueError, match="included files only"):
        validate_args(parser.parse_args(["--diff", str(listing), "-d", "dir"]))


def test_validate_args_missing_listing(parser, tmp_path):
    with pytest.raises(ValueError, match="Listing file not found"):
        validate_args(parser.parse_args(["--diff", str(tmp_path / "missing.txt"), "dir"]))
