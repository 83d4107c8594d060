from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .config import get_settings
from .tree import TreeNode, display_path, iter_with_names

ELLIPSIS = '…'


@dataclass(frozen=True)
class SearchEntry:
    id: str
    path: str
    name: str
    description: Optional[str] = None
    rules_text: Optional[str] = None


@dataclass(frozen=True)
class SearchResult:
    id: str
    path: str
    name: str
    description: Optional[str] = None
    rules_text: Optional[str] = None
    snippet: Optional[str] = None


def flatten(tree: TreeNode) -> List[SearchEntry]:
    """Flatten a tree into search entries, pre-order."""
    entries: List[SearchEntry] = []
    for node, ancestors in iter_with_names(tree):
        entries.append(SearchEntry(
            id=node.id,
            path=display_path(node, ancestors),
            name=node.name,
            description=node.description,
            rules_text=' '.join(node.rules) if node.rules else None,
        ))
    return entries


def extract_snippet(text: str, index: int, match_length: int, before: int, after: int) -> str:
    """Cut a window around ``text[index:index + match_length]``.

    An ellipsis marks each side where the window stops short of the text.
    """
    start = max(0, index - before)
    end = min(len(text), index + match_length + after)
    prefix = ELLIPSIS if start > 0 else ''
    suffix = ELLIPSIS if end < len(text) else ''
    return f"{prefix}{text[start:end]}{suffix}"


def search(entries: Iterable[SearchEntry], query: str, limit: Optional[int] = None) -> List[SearchResult]:
    """Case-insensitive substring search over path, description and rules.

    The snippet comes from the description when it matches, else from the
    rules text; a path-only hit has no snippet. Results keep flatten order and
    are capped at ``limit`` (``Settings.search_result_limit`` by default).
    """
    settings = get_settings()
    if limit is None:
        limit = settings.search_result_limit
    q = (query or '').strip().lower()
    if not q:
        return []
    # Matched on the original text so snippet offsets line up with it.
    pattern = re.compile(re.escape(q), re.IGNORECASE)

    results: List[SearchResult] = []
    for entry in entries:
        if len(results) >= limit:
            break

        desc = entry.description or ''
        rules = entry.rules_text or ''
        d_match = pattern.search(desc)
        r_match = pattern.search(rules)
        path_match = q in entry.path.lower()
        if not (path_match or d_match or r_match):
            continue

        snippet = None
        hit, text = (d_match, desc) if d_match else (r_match, rules)
        if hit:
            snippet = extract_snippet(
                text, hit.start(), hit.end() - hit.start(),
                settings.snippet_context_before, settings.snippet_context_after,
            )

        results.append(SearchResult(
            id=entry.id,
            path=entry.path,
            name=entry.name,
            description=entry.description,
            rules_text=entry.rules_text,
            snippet=snippet,
        ))
    return results
