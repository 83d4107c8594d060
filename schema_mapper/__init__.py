"""Core logic for Schema Mapper.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- compile a JSON Schema (or plain JSON value) into a TreeNode tree
- reconcile field mappings against the tree and detect conflicts
- keep mappings in an in-memory store
- flatten and search the tree
"""
from .reconcile import detect_conflict, find_conflicts, reconcile
from .records import FieldRef, Mapping, MappingCandidate, TargetNodeRef
from .flattening import SearchEntry, SearchResult, flatten, search
from .schema_utils import build_schema_tree, build_tree
from .store import MappingStore, clear, commit, import_batch
from .tree import ExcelMeta, IdSequence, TreeNode
from .value_tree import LeafOverride, build_value_tree

__all__ = [
    "ExcelMeta",
    "FieldRef",
    "IdSequence",
    "LeafOverride",
    "Mapping",
    "MappingCandidate",
    "MappingStore",
    "SearchEntry",
    "SearchResult",
    "TargetNodeRef",
    "TreeNode",
    "build_schema_tree",
    "build_tree",
    "build_value_tree",
    "clear",
    "commit",
    "detect_conflict",
    "find_conflicts",
    "flatten",
    "import_batch",
    "reconcile",
    "search",
]
