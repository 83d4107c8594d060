from __future__ import annotations

import json
from typing import Any, List, Optional

import gradio as gr

from .accessors import annotate_target, find_node_by_path
from .exceptions import SchemaMapperError
from .flattening import flatten, search
from .io_utils import parse_json_text, parse_mapping_records, read_json_content
from .logging_utils import create_logger
from .reconcile import find_conflicts, reconcile
from .records import FieldRef, Mapping, MappingCandidate, TargetNodeRef
from .samples import get_sample_schema
from .schema_utils import build_tree
from .store import MappingStore
from .tree import TreeNode, leaves, strip_excel_meta, unmapped_required_leaves

logger = create_logger(__name__)

MAPPING_HEADERS = ["Target Path", "Target Type", "Field", "Field Type", "Mapping Details", "Outputs"]


def tree_json(tree: Optional[TreeNode]):
    return tree.to_dict() if tree is not None else None


def unmapped_rows(tree: Optional[TreeNode]) -> List[List[str]]:
    if tree is None:
        return []
    return [[row['path'], row['requiredState']] for row in unmapped_required_leaves(tree)]


def mapping_rows(mappings: Optional[List[Mapping]]) -> List[List[str]]:
    return [
        [
            m.target_node.path or m.target_node.name,
            m.target_node.type,
            m.field.name,
            m.field.field_type,
            m.mapping_details,
            m.outputs,
        ]
        for m in (mappings or [])
    ]


def target_choices(tree: Optional[TreeNode]) -> List[str]:
    if tree is None:
        return []
    return [n.path_key for n in leaves(tree) if n.path_key]


def _view(tree: Optional[TreeNode], mappings: List[Mapping], message: str):
    return tree, mappings, tree_json(tree), unmapped_rows(tree), mapping_rows(mappings), message


def _load_document(document: Any, mappings: Optional[List[Mapping]]):
    tree = build_tree(document)
    mappings = mappings or []
    if mappings:
        tree = reconcile(tree, mappings)
    leaf_paths = target_choices(tree)
    message = f"Loaded '{tree.name}'. Found {len(leaf_paths)} leaf fields."
    logger.info(message)
    return (
        tree,
        tree_json(tree),
        gr.update(choices=leaf_paths, value=None),
        unmapped_rows(tree),
        message,
    )


def load_document_handler(file_obj, mappings):
    try:
        document = read_json_content(file_obj)
    except SchemaMapperError as e:
        return None, None, gr.update(choices=[], value=None), [], str(e)
    return _load_document(document, mappings)


def load_text_handler(text, mappings):
    try:
        document = parse_json_text(text)
    except SchemaMapperError as e:
        return None, None, gr.update(choices=[], value=None), [], str(e)
    return _load_document(document, mappings)


def load_sample_handler(sample_key, mappings):
    if not sample_key:
        return None, None, gr.update(choices=[], value=None), [], "Select a schema to visualize."
    try:
        document = get_sample_schema(sample_key)
    except KeyError as e:
        return None, None, gr.update(choices=[], value=None), [], str(e)
    return _load_document(document, mappings)


def search_handler(tree, query):
    if tree is None or not query or not query.strip():
        return []
    return [[r.path, r.name, r.snippet or ""] for r in search(flatten(tree), query)]


def save_mapping_handler(
    tree,
    mappings,
    target_path,
    field_name,
    field_type,
    field_essence,
    dgh,
    always,
    mapping_details,
    outputs,
    confirm_overwrite,
):
    mappings = list(mappings or [])
    if tree is None:
        return _view(tree, mappings, "Load a schema first.")
    if not field_name or not field_name.strip():
        return _view(tree, mappings, "Field name is required.")

    node = find_node_by_path(tree, target_path or "")
    if node is None or not target_path:
        return _view(tree, mappings, f"Unknown target path: {target_path!r}")
    if not node.is_leaf:
        return _view(tree, mappings, f"'{target_path}' is not a leaf field.")

    target = TargetNodeRef.from_node(node)
    fld = FieldRef(
        name=field_name.strip(),
        field_type=(field_type or "").strip(),
        field_essence=field_essence or "",
        dgh=dgh or "",
        always=always or "",
    )

    conflicts = find_conflicts(MappingCandidate(target_node=target, field=fld), mappings)
    if conflicts and not confirm_overwrite:
        taken_by = ", ".join(sorted({f"{m.field.name} ({m.field.field_type})" for m in conflicts}))
        return _view(
            tree,
            mappings,
            f"'{target.name}' is already mapped to {taken_by}. Tick 'Confirm overwrite' and save again to proceed.",
        )

    mapping = Mapping(
        target_node=target,
        field=fld,
        mapping_details=mapping_details or "",
        outputs=outputs or "",
    )
    moved = any(
        m.commit_key == mapping.commit_key and m.target_node.path != target.path
        for m in mappings
    )
    store = MappingStore(mappings)
    store.commit(mapping)
    if moved:
        # The previous target of this field must lose its annotation.
        tree = reconcile(strip_excel_meta(tree), store.mappings)
    else:
        tree = annotate_target(tree, mapping)
    return _view(tree, store.mappings, f"Mapping saved for {target.name}")


def import_mappings_handler(file_obj, tree, mappings):
    mappings = list(mappings or [])
    try:
        records = parse_mapping_records(read_json_content(file_obj))
    except SchemaMapperError as e:
        return _view(tree, mappings, str(e))

    store = MappingStore(mappings)
    store.import_batch(records)
    if tree is not None:
        tree = reconcile(tree, records)
    return _view(tree, store.mappings, f"Imported {len(records)} mappings. Total: {len(store)}.")


def clear_mappings_handler(tree, mappings):
    store = MappingStore(mappings or [])
    tree = store.clear(tree)
    return _view(tree, store.mappings, "All mappings cleared.")


def export_mappings_json(mappings) -> str:
    """Render the current mappings as the JSON record list accepted by the import handler."""
    return json.dumps([m.to_dict() for m in (mappings or [])], ensure_ascii=False, indent=2)
