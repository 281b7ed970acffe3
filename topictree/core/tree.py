"""
Helpers for walking and editing a conversation tree.

A conversation is a tree of ChatNode objects. A branch is addressed by its
path: the list of node ids from the root down to a node.
"""
from typing import List, Optional

from topictree.core.models import ChatNode


def flatten_nodes(root: ChatNode) -> List[ChatNode]:
    """
    Return every node of the tree in pre-order (parents before children,
    siblings left to right).
    """
    out: List[ChatNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        out.append(node)
        stack.extend(reversed(node.children))
    return out


def find_node(root: ChatNode, node_id: str) -> Optional[ChatNode]:
    for node in flatten_nodes(root):
        if node.id == node_id:
            return node
    return None


def get_branch_path_to_node(root: ChatNode, node_id: str) -> Optional[List[str]]:
    """
    Ids from the root down to ``node_id``.

    Returns None when the node is not part of the tree.
    """
    if root.id == node_id:
        return [root.id]
    for child in root.children:
        path = get_branch_path_to_node(child, node_id)
        if path:
            return [root.id] + path
    return None


def node_depth(root: ChatNode, node_id: str) -> int:
    """Depth of a node (root is 0), or -1 if absent."""
    path = get_branch_path_to_node(root, node_id)
    return len(path) - 1 if path else -1


def get_linear_thread(root: ChatNode, path: List[str]) -> List[ChatNode]:
    """Resolve a path to nodes, skipping ids that are not in the tree."""
    out = []
    for node_id in path:
        node = find_node(root, node_id)
        if node is not None:
            out.append(node)
    return out


def get_default_path(root: ChatNode) -> List[str]:
    """Follow the first child from the root to a leaf."""
    path = []
    current: Optional[ChatNode] = root
    while current is not None:
        path.append(current.id)
        current = current.children[0] if current.children else None
    return path


def add_child_to_node(root: ChatNode, parent_id: str, child: ChatNode) -> ChatNode:
    """
    Return a copy of the tree with ``child`` appended under ``parent_id``.

    The input tree is left untouched.

    Raises
    ----
    KeyError
        If ``parent_id`` is not in the tree
    """
    new_root = root.model_copy(deep=True)
    parent = find_node(new_root, parent_id)
    if parent is None:
        raise KeyError(parent_id)
    parent.children.append(child.model_copy(update={"parent_id": parent_id}, deep=True))
    return new_root
