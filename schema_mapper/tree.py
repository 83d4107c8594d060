"""TreeNode model shared by the schema and value tree builders.

Nodes are plain dataclasses. Builders create them, and every later step
(reconciliation, clearing, commit annotation) returns new nodes instead of
mutating the ones it was given.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .paths import make_node_id, path_key_of

REQUIRED = 'required'
CONDITIONAL = 'conditional'
OPTIONAL = 'optional'

# Separator used for human-readable node paths (search entries, reports).
PATH_SEPARATOR = '.'


class IdSequence:
    """Sequential id generator scoped to one tree build."""

    def __init__(self, start: int = 0):
        self._last = start

    def next(self) -> int:
        self._last += 1
        return self._last

    def node_id(self, segments) -> str:
        return make_node_id(segments, self.next())


@dataclass(frozen=True)
class ExcelMeta:
    field_essence: str = ''
    dgh: str = ''
    always: str = ''
    mapping_details: str = ''
    outputs: str = ''

    @property
    def is_mapped(self) -> bool:
        return any((self.field_essence, self.dgh, self.always, self.mapping_details, self.outputs))

    def to_dict(self) -> Dict[str, str]:
        return {
            'fieldEssence': self.field_essence,
            'dgh': self.dgh,
            'always': self.always,
            'mappingDetails': self.mapping_details,
            'outputs': self.outputs,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ExcelMeta':
        data = data or {}
        return cls(
            field_essence=str(data.get('fieldEssence') or ''),
            dgh=str(data.get('dgh') or ''),
            always=str(data.get('always') or ''),
            mapping_details=str(data.get('mappingDetails') or ''),
            outputs=str(data.get('outputs') or ''),
        )


@dataclass
class TreeNode:
    id: str
    name: str
    type: str = 'unknown'
    description: Optional[str] = None
    rules: Optional[List[str]] = None
    required_state: Optional[str] = None
    children: Optional[List['TreeNode']] = None
    excel_meta: Optional[ExcelMeta] = None
    value_preview: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_mapped(self) -> bool:
        return self.excel_meta is not None and self.excel_meta.is_mapped

    @property
    def path_key(self) -> str:
        return path_key_of(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Render the node (recursively) with camelCase keys, omitting absent fields."""
        out: Dict[str, Any] = {'id': self.id, 'name': self.name, 'type': self.type}
        if self.description is not None:
            out['description'] = self.description
        if self.value_preview is not None:
            out['valuePreview'] = self.value_preview
        if self.rules:
            out['rules'] = list(self.rules)
        if self.required_state is not None:
            out['requiredState'] = self.required_state
        if self.excel_meta is not None:
            out['excelMeta'] = self.excel_meta.to_dict()
        if self.children:
            out['children'] = [child.to_dict() for child in self.children]
        return out


def iter_nodes(root: TreeNode) -> Iterator[TreeNode]:
    """Pre-order walk."""
    yield root
    for child in root.children or []:
        yield from iter_nodes(child)


def iter_with_names(root: TreeNode, ancestors: Tuple[str, ...] = ()) -> Iterator[Tuple[TreeNode, Tuple[str, ...]]]:
    """Pre-order walk yielding each node with the names of its ancestors (root included)."""
    yield root, ancestors
    for child in root.children or []:
        yield from iter_with_names(child, ancestors + (root.name,))


def display_path(node: TreeNode, ancestors: Tuple[str, ...]) -> str:
    """Join ancestor names and the node's own name, leaving out the root."""
    return PATH_SEPARATOR.join((ancestors + (node.name,))[1:])


def leaves(root: TreeNode) -> List[TreeNode]:
    return [n for n in iter_nodes(root) if n.is_leaf]


def strip_excel_meta(root: TreeNode) -> TreeNode:
    """Return a copy of the tree with every node's mapping annotation removed."""
    children = [strip_excel_meta(c) for c in root.children] if root.children is not None else None
    return replace(root, excel_meta=None, children=children)


def unmapped_required_leaves(root: TreeNode) -> List[Dict[str, str]]:
    """List required leaves that have no mapping yet, in pre-order."""
    results: List[Dict[str, str]] = []
    for node, ancestors in iter_with_names(root):
        if node.is_leaf and node.required_state == REQUIRED and not node.is_mapped:
            results.append({
                'id': node.id,
                'path': display_path(node, ancestors),
                'requiredState': node.required_state,
            })
    return results
