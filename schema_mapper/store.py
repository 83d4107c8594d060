from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, Iterator, List, Optional

from .logging_utils import create_logger
from .records import Mapping
from .tree import TreeNode, strip_excel_meta

logger = create_logger(__name__)


def _upsert(current: Iterable[Mapping], incoming: Iterable[Mapping], key_of: Callable[[Mapping], Hashable]) -> List[Mapping]:
    """Merge ``incoming`` into ``current`` keyed by ``key_of``; later entries win.

    A replaced key keeps the slot of its first occurrence.
    """
    merged: Dict[Hashable, Mapping] = {}
    for m in current:
        merged[key_of(m)] = m
    for m in incoming:
        merged[key_of(m)] = m
    return list(merged.values())


class MappingStore:
    """In-memory collection of mapping records.

    ``commit`` and ``import_batch`` deduplicate on different keys: a commit
    keeps one target per external field, an import keeps one record per
    (target name, target type, field name, field type).

    Not thread-safe. Commit, import and clear are read-then-write sequences,
    so embeddings with more than one writer must serialize the calls.
    """

    def __init__(self, mappings: Optional[Iterable[Mapping]] = None):
        self._mappings: List[Mapping] = list(mappings or [])

    def __len__(self) -> int:
        return len(self._mappings)

    def __iter__(self) -> Iterator[Mapping]:
        return iter(list(self._mappings))

    @property
    def mappings(self) -> List[Mapping]:
        return list(self._mappings)

    def commit(self, mapping: Mapping) -> Mapping:
        """Upsert a single user-saved mapping keyed by (field name, field type)."""
        replaced = [m for m in self._mappings if m.commit_key == mapping.commit_key]
        self._mappings = _upsert(self._mappings, [mapping], lambda m: m.commit_key)
        if replaced:
            logger.info(
                "Field '%s' (%s) remapped from '%s' to '%s'",
                mapping.field.name, mapping.field.field_type,
                replaced[-1].target_node.path or replaced[-1].target_node.name,
                mapping.target_node.path or mapping.target_node.name,
            )
        return mapping

    def import_batch(self, mappings: Iterable[Mapping]) -> int:
        """Merge imported records keyed by (target name, target type, field name, field type).

        Returns the store size after the merge.
        """
        incoming = list(mappings)
        self._mappings = _upsert(self._mappings, incoming, lambda m: m.import_key)
        logger.info("Imported %d mapping records; store now holds %d", len(incoming), len(self._mappings))
        return len(self._mappings)

    def clear(self, tree: Optional[TreeNode] = None) -> Optional[TreeNode]:
        """Empty the store; when a tree is given, return it with every annotation stripped."""
        dropped = len(self._mappings)
        self._mappings = []
        logger.info("Cleared %d mappings", dropped)
        if tree is None:
            return None
        return strip_excel_meta(tree)


def commit(store: MappingStore, mapping: Mapping) -> Mapping:
    return store.commit(mapping)


def import_batch(store: MappingStore, mappings: Iterable[Mapping]) -> int:
    return store.import_batch(mappings)


def clear(store: MappingStore, tree: Optional[TreeNode] = None) -> Optional[TreeNode]:
    return store.clear(tree)
