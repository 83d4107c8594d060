from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .config import get_settings
from .logging_utils import create_logger
from .tree import ExcelMeta, IdSequence, TreeNode

logger = create_logger(__name__)

ELLIPSIS = '…'


@dataclass(frozen=True)
class LeafOverride:
    """A pre-annotated leaf placed inside a plain JSON value.

    The value tree builder does not expand it; it becomes a childless string
    node carrying ``preview`` and ``excel_meta`` as given.
    """

    preview: Optional[str] = None
    excel_meta: Optional[ExcelMeta] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LeafOverride':
        """Convert the ``{"preview": ..., "excelMeta": {...}}`` placeholder shape."""
        preview = data.get('preview')
        meta = data.get('excelMeta')
        return cls(
            preview=preview if isinstance(preview, str) else None,
            excel_meta=ExcelMeta.from_dict(meta) if isinstance(meta, dict) else None,
        )


def infer_value_type(value: Any) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'integer'
    if isinstance(value, float):
        return 'integer' if value.is_integer() else 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, (list, tuple)):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    if isinstance(value, LeafOverride):
        return 'string'
    return 'unknown'


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit - 1] + ELLIPSIS


def safe_preview(value: Any) -> str:
    """Short inline rendering of one array item."""
    t = infer_value_type(value)
    if t == 'string':
        collapsed = re.sub(r'\s+', ' ', value)
        limit = get_settings().preview_item_chars
        return '"' + collapsed[:limit] + (ELLIPSIS if len(collapsed) > limit else '') + '"'
    if t == 'null':
        return 'null'
    if t == 'boolean':
        return 'true' if value else 'false'
    if t == 'array':
        return f'[{ELLIPSIS}]'
    if t == 'object':
        return f'{{{ELLIPSIS}}}'
    return str(value)


def summarize_value(value: Any, value_type: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(description, preview)`` for a value of the given type."""
    settings = get_settings()
    if value_type == 'string':
        return f"String of length {len(value)}.", '"' + _truncate(value, settings.preview_string_max) + '"'
    if value_type == 'number':
        return 'Floating-point numeric value.', None
    if value_type == 'integer':
        return 'Integer numeric value.', None
    if value_type == 'boolean':
        return 'Boolean value.', None
    if value_type == 'null':
        return 'Null value.', None
    if value_type == 'array':
        count = len(value)
        item_type = infer_value_type(value[0]) if count else 'unknown'
        example = f" (e.g., {item_type})" if item_type != 'unknown' else ''
        shown = [safe_preview(v) for v in value[:settings.preview_item_count]]
        more = f", {ELLIPSIS}" if count > settings.preview_item_count else ''
        return f"Array with {_plural(count, 'item')}{example}.", f"[{', '.join(shown)}{more}]"
    if value_type == 'object':
        keys = list(value.keys())
        shown = [str(k) for k in keys[:settings.preview_item_count]]
        more = f", {ELLIPSIS}" if len(keys) > settings.preview_item_count else ''
        return f"Object with {_plural(len(keys), 'key')}.", f"{{ {', '.join(shown)}{more} }}"
    return None, None


def _build_node(name: str, value: Any, path: List[str], ids: IdSequence) -> TreeNode:
    value_type = infer_value_type(value)
    node = TreeNode(id=ids.node_id(path), name=name, type=value_type)

    if isinstance(value, LeafOverride):
        node.value_preview = value.preview
        node.excel_meta = value.excel_meta
        return node

    try:
        node.description, node.value_preview = summarize_value(value, value_type)
    except Exception:
        logger.exception("Failed to summarize value at '%s'", node.id)
        node.description, node.value_preview = None, None

    if value_type == 'object':
        children = [_build_node(str(key), value[key], path + [str(key)], ids) for key in sorted(value, key=str)]
        node.children = children or None
    elif value_type == 'array':
        children = [_build_node(f"[{idx}]", item, path + [str(idx)], ids) for idx, item in enumerate(value)]
        node.children = children or None
    return node


def build_value_tree(value: Any, name: str = 'root', ids: Optional[IdSequence] = None) -> TreeNode:
    """Compile a plain JSON value (no schema) into a TreeNode graph."""
    if ids is None:
        ids = IdSequence()
    return _build_node(name, value, [], ids)
