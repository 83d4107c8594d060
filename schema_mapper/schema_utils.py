from __future__ import annotations

import re
from typing import Any, List, Optional

from .logging_utils import create_logger
from .rules import extract_rules
from .tree import CONDITIONAL, OPTIONAL, REQUIRED, IdSequence, TreeNode
from .value_tree import build_value_tree

logger = create_logger(__name__)

_DIRECT_TYPES = ('integer', 'number', 'string', 'boolean', 'null', 'array')


def is_likely_json_schema(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    if '$schema' in value:
        return True
    if isinstance(value.get('properties'), dict):
        return True
    return value.get('type') in ('object', 'array')


def normalize_schema_type(schema: Any) -> str:
    """Map a schema's ``type`` keyword onto a node type.

    A list of types uses its first entry; a missing or unrecognised type is
    treated as ``object``.
    """
    if not isinstance(schema, dict):
        return 'unknown'
    t = schema.get('type')
    if isinstance(t, list):
        t = t[0] if t else None
    if t in _DIRECT_TYPES:
        return t
    return 'object'


def _describe(schema: dict) -> Optional[str]:
    description = schema.get('description')
    if description is None:
        return None
    return description if isinstance(description, str) else str(description)


def _required_keys(schema: dict) -> set:
    required = schema.get('required')
    if not isinstance(required, list):
        return set()
    return {k for k in required if isinstance(k, str)}


def _allof_segment(sub: Any, idx: int) -> str:
    title = sub.get('title') if isinstance(sub, dict) else None
    if isinstance(title, str) and title.strip():
        return re.sub(r'\s+', '_', title.strip())
    return f"allOf_{idx}"


def _allof_name(sub: Any, idx: int) -> str:
    title = sub.get('title') if isinstance(sub, dict) else None
    if isinstance(title, str) and title.strip():
        return title
    return f"allOf_{idx}"


def _build_node(
    name: str,
    schema: Any,
    path: List[str],
    chain_required: bool,
    required_state: Optional[str],
    ids: IdSequence,
) -> TreeNode:
    node_type = normalize_schema_type(schema)
    node = TreeNode(
        id=ids.node_id(path),
        name=name,
        type=node_type,
        required_state=required_state,
    )
    if not isinstance(schema, dict):
        return node

    try:
        node.description = _describe(schema)
        node.rules = extract_rules(schema)
    except Exception:
        logger.exception("Failed to read rules/description at '%s'", node.id)
        node.description = None
        node.rules = None

    # Array items and allOf branches have no named-required semantics of their own.
    passthrough_state = required_state or REQUIRED
    children: List[TreeNode] = []

    if node_type == 'object':
        properties = schema.get('properties')
        if isinstance(properties, dict):
            required_keys = _required_keys(schema)
            for key in sorted(properties):
                listed = key in required_keys
                if listed:
                    state = REQUIRED if chain_required else CONDITIONAL
                else:
                    state = OPTIONAL
                children.append(
                    _build_node(key, properties[key], path + [key], listed and chain_required, state, ids)
                )
    elif node_type == 'array':
        items = schema.get('items')
        if isinstance(items, list):
            for idx, sub in enumerate(items):
                children.append(
                    _build_node(f"[{idx}]", sub, path + [str(idx)], chain_required, passthrough_state, ids)
                )
        elif isinstance(items, dict):
            children.append(
                _build_node('[item]', items, path + ['item'], chain_required, passthrough_state, ids)
            )

    all_of = schema.get('allOf')
    if isinstance(all_of, list):
        for idx, sub in enumerate(all_of, start=1):
            children.append(
                _build_node(
                    _allof_name(sub, idx),
                    sub,
                    path + [_allof_segment(sub, idx)],
                    chain_required,
                    passthrough_state,
                    ids,
                )
            )

    node.children = children or None
    return node


def build_schema_tree(schema: Any, ids: Optional[IdSequence] = None) -> TreeNode:
    """Compile a JSON Schema document into a TreeNode graph.

    Property children are sorted by key so equal schemas give equal trees
    whatever their source ordering. Each node id is ``<dotted.path>:<n>`` with
    ``n`` drawn from ``ids`` (a fresh sequence per call unless one is given).
    ``$ref``, ``oneOf`` and ``anyOf`` are not expanded; a cyclic schema is not
    detected.
    """
    if ids is None:
        ids = IdSequence()
    title = schema.get('title') if isinstance(schema, dict) else None
    root_name = title if isinstance(title, str) and title else 'root'
    return _build_node(root_name, schema, [], True, None, ids)


def build_tree(document: Any, ids: Optional[IdSequence] = None) -> TreeNode:
    """Build a schema tree when the document looks like a JSON Schema, else a value tree."""
    if is_likely_json_schema(document):
        return build_schema_tree(document, ids)
    return build_value_tree(document, 'root', ids)
