"""Build and render trees of scanned relative paths.

A scan yields flat lists of relative paths. The helpers here arrange such lists
into an anytree hierarchy of ScanNode objects and render it in the style of the
Unix ``tree`` command.
"""

import os
from typing import Iterable, Iterator

from .scan_node import ScanNode


def build_tree(
    root_name: str, files: Iterable[str], directories: Iterable[str] = (), separator: str = os.sep
) -> ScanNode:
    """Arrange relative paths into a tree.

    Intermediate directories missing from ``directories`` are created on demand.
    The empty name (the scan root) is ignored.

    Args:
        root_name: Name shown for the root node.
        files: Relative file paths.
        directories: Relative directory paths, so that empty directories show up.
        separator: Separator used in the relative paths.

    Returns:
        The root node.

    Example:
        >>> root = build_tree("project", ["src/app.py", "README.md"], ["docs"], separator="/")
        >>> sorted(node.name for node in root.children)
        ['README.md', 'docs', 'src']
        >>> root.child("src").child("app.py").is_dir
        False
    """
    root = ScanNode(root_name, is_dir=True)
    for directory in directories:
        _insert(root, directory, True, separator)
    for file in files:
        _insert(root, file, False, separator)
    return root


def _insert(root: ScanNode, relative_path: str, is_dir: bool, separator: str) -> None:
    segments = [segment for segment in relative_path.split(separator) if segment]
    if not segments:
        return
    node = root
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        existing = node.child(segment)
        if existing is None:
            existing = ScanNode(segment, parent=node, is_dir=is_dir or not last)
        elif not last:
            existing.is_dir = True
        node = existing


def stream_tree_representation(root: ScanNode) -> Iterator[str]:
    """Generate a tree representation one line at a time.

    Directories come before files; both are ordered case-insensitively.

    Yields:
        Lines of the tree representation, including the connecting lines.

    Example:
        >>> root = build_tree("project", ["src/app.py", "README.md"], separator="/")
        >>> for line in stream_tree_representation(root):
        ...     print(line)
        project/
        ├── src/
        │   └── app.py
        └── README.md
    """

    def write_node(node: ScanNode, prefix: str = "", is_last: bool = True, is_root: bool = False) -> Iterator[str]:
        if is_root:
            yield f"{node.name}/"
        else:
            connector = "└── " if is_last else "├── "
            suffix = "/" if node.is_dir else ""
            yield f"{prefix}{connector}{node.name}{suffix}"

        if node.is_dir:
            sorted_children = sorted(node.children, key=lambda n: (not n.is_dir, n.name.lower()))
            for i, child in enumerate(sorted_children):
                is_last_child = i == len(sorted_children) - 1
                if is_root:
                    new_prefix = ""
                else:
                    new_prefix = prefix + ("    " if is_last else "│   ")
                yield from write_node(child, new_prefix, is_last_child, is_root=False)

    yield from write_node(root, is_root=True)


def get_tree_representation(root: ScanNode) -> str:
    """Get the complete tree representation as a single string."""
    return "\n".join(stream_tree_representation(root))
