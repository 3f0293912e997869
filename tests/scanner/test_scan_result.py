"""Unit tests for snapshot diffs."""

import pytest

from dirscan.scanner import ScanDiff, diff_files


def test_diff_files():
    diff = diff_files(["a.txt", "b.txt"], ["b.txt", "c.txt"])
    assert diff.added == {"c.txt"}
    assert diff.removed == {"a.txt"}
    assert not diff.is_empty


def test_identical_snapshots_give_empty_diff():
    diff = diff_files(["a", "b"], ["b", "a"])
    assert diff.is_empty
    assert diff == ScanDiff()


@pytest.mark.parametrize(
    "old,new,added,removed",
    [
        (None, ["a"], {"a"}, set()),
        (["a"], None, set(), {"a"}),
        (None, None, set(), set()),
        ([], [], set(), set()),
    ],
)
def test_missing_snapshots_are_empty(old, new, added, removed):
    diff = diff_files(old, new)
    assert diff.added == added
    assert diff.removed == removed


def test_duplicates_collapse():
    diff = diff_files(["a", "a"], ["b", "b", "b"])
    assert diff.added == {"b"}
    assert diff.removed == {"a"}


@pytest.mark.parametrize(
    "old,new",
    [
        (["a", "b", "c"], ["b", "c", "d", "e"]),
        ([], ["x"]),
        (["x", "y"], []),
        (["sub/a", "sub/b"], ["sub/b", "other/a"]),
    ],
)
def test_diff_reconstructs_new_snapshot(old, new):
    diff = diff_files(old, new)
    assert not diff.added & diff.removed
    assert (set(old) - diff.removed) | diff.added == set(new)


def test_scan_diff_is_immutable():
    diff = diff_files(["a"], ["b"])
    with pytest.raises(AttributeError):
        diff.added = frozenset()  # type: ignore[misc]
