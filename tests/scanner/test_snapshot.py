"""Unit tests for DirectorySnapshot."""

import pytest

from dirscan.exceptions import ConfigurationError
from dirscan.scanner import DirectoryScanner, DirectorySnapshot


def test_first_capture_reports_no_changes(simple_tree):
    snapshot = DirectorySnapshot(simple_tree)
    diff = snapshot.capture()

    assert diff.is_empty
    assert snapshot.get_files_added() == []
    assert snapshot.get_files_removed() == []
    assert snapshot.get_scanned_files() == ["a.txt", "b.dat", "sub/c.txt"]


def test_successive_captures(simple_tree):
    snapshot = DirectorySnapshot(simple_tree)
    snapshot.capture()

    (simple_tree / "b.dat").unlink()
    (simple_tree / "sub" / "d.txt").write_text("d")
    (simple_tree / "e.txt").write_text("e")
    diff = snapshot.capture()

    assert diff.added == {"e.txt", "sub/d.txt"}
    assert diff.removed == {"b.dat"}
    assert snapshot.get_files_added() == ["e.txt", "sub/d.txt"]
    assert snapshot.get_files_removed() == ["b.dat"]

    # The latest capture is the new baseline
    assert snapshot.capture().is_empty
    assert snapshot.get_files_added() == []


def test_capture_with_custom_scanner(simple_tree, tmp_path_factory):
    elsewhere = tmp_path_factory.mktemp("elsewhere")
    scanner = DirectoryScanner(elsewhere, includes=["**/*.txt"])
    snapshot = DirectorySnapshot(simple_tree)
    snapshot.capture(scanner)

    assert scanner.basedir == simple_tree
    assert snapshot.get_scanned_files() == ["a.txt", "sub/c.txt"]

    (simple_tree / "new.dat").write_text("ignored")
    assert snapshot.capture(scanner).is_empty


def test_calculate_diff():
    diff = DirectorySnapshot.calculate_diff(["a", "b"], ["b", "c"])
    assert diff.added == {"c"}
    assert diff.removed == {"a"}


def test_capture_of_missing_directory(tmp_path):
    snapshot = DirectorySnapshot(tmp_path / "missing")
    with pytest.raises(ConfigurationError):
        snapshot.capture()
