from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .paths import path_key_of
from .reconcile import excel_meta_from
from .records import Mapping
from .tree import TreeNode, iter_nodes


def find_node_by_id(tree: Optional[TreeNode], node_id: str) -> Optional[TreeNode]:
    if tree is None or not node_id:
        return None
    for node in iter_nodes(tree):
        if node.id == node_id:
            return node
    return None


def find_node_by_path(tree: Optional[TreeNode], path: str) -> Optional[TreeNode]:
    """Find the first node (pre-order) whose id carries the given dotted path."""
    if tree is None:
        return None
    for node in iter_nodes(tree):
        if node.path_key == path:
            return node
    return None


def annotate_target(tree: TreeNode, mapping: Mapping) -> TreeNode:
    """Return a copy of ``tree`` with the mapping's target leaf annotated.

    The target is looked up by node id, then by dotted path when the id comes
    from an earlier build. Containers are left untouched.
    """
    target = find_node_by_id(tree, mapping.target_node.id)
    if target is None:
        target = find_node_by_path(tree, mapping.target_node.path or path_key_of(mapping.target_node.id))
    if target is None or not target.is_leaf:
        return tree
    target_id = target.id
    meta = excel_meta_from(mapping)

    def visit(node: TreeNode) -> TreeNode:
        if node.id == target_id:
            return replace(node, excel_meta=meta)
        if node.children:
            return replace(node, children=[visit(c) for c in node.children])
        return node

    return visit(tree)
