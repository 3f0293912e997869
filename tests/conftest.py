"""Test configuration and fixtures for dirscan."""

import os
from pathlib import Path
from typing import Iterable

import pytest


def create_files(root: Path, relative_paths: Iterable[str]) -> Path:
    """Create empty files (and their parent directories) below ``root``."""
    for relative_path in relative_paths:
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(relative_path)
    return root


def walk_tree(root: Path):
    """Return every relative file and directory path below ``root`` ("" for the root)."""
    files, directories = set(), {""}
    for dirpath, dirnames, filenames in os.walk(root):
        relative = os.path.relpath(dirpath, root)
        prefix = "" if relative == "." else relative + os.sep
        directories.update(prefix + name for name in dirnames)
        files.update(prefix + name for name in filenames)
    return files, directories


@pytest.fixture
def simple_tree(tmp_path):
    """a.txt, b.dat and sub/c.txt."""
    return create_files(tmp_path, ["a.txt", "b.dat", "sub/c.txt"])


@pytest.fixture
def project_tree(tmp_path):
    """A small source tree with build output, docs and version control metadata."""
    return create_files(
        tmp_path,
        [
            "README.md",
            "setup.py",
            "src/pkg/__init__.py",
            "src/pkg/core.py",
            "src/pkg/core.pyc",
            "tests/test_core.py",
            "build/lib/pkg/core.py",
            "build/temp/core.o",
            "docs/index.md",
            "docs/api/reference.md",
            ".git/HEAD",
            ".git/objects/ab/cdef",
            "notes.txt~",
        ],
    )


@pytest.fixture
def symlink_tree(tmp_path):
    """real/f.txt plus a link to the real directory, a link to a file and a loop."""
    create_files(tmp_path, ["a.txt", "real/f.txt"])
    try:
        os.symlink(tmp_path / "real", tmp_path / "link")
        os.symlink(tmp_path / "a.txt", tmp_path / "file_link.txt")
        os.symlink(tmp_path / "real", tmp_path / "real" / "loop")
    except (OSError, NotImplementedError):
        pytest.skip("Symbolic links are not supported on this platform")
    return tmp_path


@pytest.fixture
def make_tree(tmp_path):
    """Factory creating the given relative files below ``tmp_path``."""

    def _make(relative_paths: Iterable[str]) -> Path:
        return create_files(tmp_path, relative_paths)

    return _make


@pytest.fixture
def tree_entries():
    """The ``walk_tree`` helper, for comparing scan results with the filesystem."""
    return walk_tree
