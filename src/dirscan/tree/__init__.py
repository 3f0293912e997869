"""Tree views of scan results."""

from .scan_node import ScanNode
from .tree_builder import build_tree, get_tree_representation, stream_tree_representation

__all__ = ["ScanNode", "build_tree", "get_tree_representation", "stream_tree_representation"]
