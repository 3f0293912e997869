"""Node representation for scanned entries in a rendered tree."""

from typing import Any, Optional

from anytree import Node


class ScanNode(Node):  # type: ignore
    """Node class representing a scanned file or directory.

    Extends anytree.Node with a flag telling directories from files. Nodes are
    built from relative path strings produced by a scan, so no filesystem access
    happens while a tree is built or rendered.

    Attributes:
        name (str): The last path segment of the entry.
        parent (Optional[ScanNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory.
        children (tuple[ScanNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = ScanNode("project", is_dir=True)
        >>> child = ScanNode("setup.py", parent=root)
        >>> child.is_dir
        False
        >>> [node.name for node in root.children]
        ['setup.py']
    """

    def __init__(
        self,
        name: str,
        parent: Optional["ScanNode"] = None,
        is_dir: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir

    def child(self, name: str) -> Optional["ScanNode"]:
        """Return the direct child called ``name``, if any."""
        for node in self.children:
            if node.name == name:
                return node
        return None
