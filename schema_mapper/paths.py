from __future__ import annotations

from typing import Sequence

SEQUENCE_SEPARATOR = ':'


def escape_path_segment(segment: str) -> str:
    """Escape a single key segment for dot-path representation.

    - Dots are escaped as '\\.' so keys like 'gpt-3.5-turbo' remain one segment.
    - Backslashes are escaped as '\\\\' so an escaped dot stays unambiguous.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('\\', '\\\\').replace('.', '\\.')


def join_path(segments: Sequence[str]) -> str:
    """Join raw key segments into an escaped dot path ('' for the root)."""
    return '.'.join(escape_path_segment(s) for s in segments)


def make_node_id(segments: Sequence[str], sequence: int) -> str:
    return f"{join_path(segments)}{SEQUENCE_SEPARATOR}{sequence}"


def path_key_of(node_id: str) -> str:
    """Return the dotted-path portion of a node id ('a.b:12' -> 'a.b').

    Splits on the last separator so property keys containing ':' survive.
    """
    if not node_id:
        return ''
    head, sep, _ = node_id.rpartition(SEQUENCE_SEPARATOR)
    return head if sep else node_id
