from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Tuple, Union

from .logging_utils import create_logger
from .records import Mapping, MappingCandidate
from .tree import ExcelMeta, TreeNode

logger = create_logger(__name__)


def excel_meta_from(mapping: Mapping) -> ExcelMeta:
    return ExcelMeta(
        field_essence=mapping.field.field_essence or '',
        dgh=mapping.field.dgh or '',
        always=mapping.field.always or '',
        mapping_details=mapping.mapping_details or '',
        outputs=mapping.outputs or '',
    )


def build_mapping_indexes(mappings: Iterable[Mapping]) -> Tuple[Dict[str, Mapping], Dict[Tuple[str, str], Mapping]]:
    """Index mappings by exact target path and by (target name, target type).

    Later mappings overwrite earlier ones sharing a key.
    """
    by_path: Dict[str, Mapping] = {}
    by_name_type: Dict[Tuple[str, str], Mapping] = {}
    for m in mappings:
        path = (m.target_node.path or '').strip()
        if path:
            by_path[path] = m
        by_name_type[m.target_key] = m
    return by_path, by_name_type


def reconcile(tree: TreeNode, mappings: Iterable[Mapping]) -> TreeNode:
    """Return a copy of ``tree`` with matching leaves annotated with ``excel_meta``.

    A leaf matches by its path key first, then by (name, type). Containers are
    never annotated but are always descended into. Nodes without a match keep
    whatever annotation they already had.
    """
    by_path, by_name_type = build_mapping_indexes(mappings)

    def visit(node: TreeNode) -> TreeNode:
        if node.children:
            return replace(node, children=[visit(c) for c in node.children])
        match = by_path.get(node.path_key) or by_name_type.get((node.name, node.type))
        if match is None:
            return replace(node)
        return replace(node, excel_meta=excel_meta_from(match))

    result = visit(tree)
    logger.debug("Reconciled tree '%s' against %d path / %d name-type keys", tree.name, len(by_path), len(by_name_type))
    return result


CandidateLike = Union[MappingCandidate, Mapping]


def find_conflicts(candidate: CandidateLike, existing: Iterable[Mapping]) -> List[Mapping]:
    """Stored mappings that already bind the candidate's target to a different field."""
    target_key = (candidate.target_node.name, candidate.target_node.type)
    return [
        m for m in existing
        if m.target_key == target_key and m.field.key != candidate.field.key
    ]


def detect_conflict(candidate: CandidateLike, existing: Iterable[Mapping]) -> bool:
    return bool(find_conflicts(candidate, existing))
