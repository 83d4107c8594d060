from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from .exceptions import MappingRecordError
from .paths import path_key_of
from .tree import TreeNode


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _text(value: Any) -> str:
    return '' if value is None else str(value)


def _optional_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class TargetNodeRef:
    """Snapshot of the tree node a mapping points at."""

    id: str
    name: str
    type: str
    path: str = ''

    @classmethod
    def from_node(cls, node: TreeNode) -> 'TargetNodeRef':
        return cls(id=node.id, name=node.name, type=node.type, path=path_key_of(node.id))

    def to_dict(self) -> Dict[str, str]:
        return {'id': self.id, 'name': self.name, 'type': self.type, 'path': self.path}


@dataclass(frozen=True)
class FieldRef:
    """External (spreadsheet) field identity plus its descriptive metadata."""

    name: str
    field_type: str = ''
    field_essence: Optional[str] = None
    dgh: Optional[str] = None
    always: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.name, self.field_type)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {'name': self.name, 'fieldType': self.field_type}
        if self.field_essence is not None:
            out['fieldEssence'] = self.field_essence
        if self.dgh is not None:
            out['dgh'] = self.dgh
        if self.always is not None:
            out['always'] = self.always
        return out


@dataclass(frozen=True)
class MappingCandidate:
    """A proposed (target, field) pair that has not been written yet."""

    target_node: TargetNodeRef
    field: FieldRef


@dataclass
class Mapping:
    target_node: TargetNodeRef
    field: FieldRef
    mapping_details: str = ''
    outputs: str = ''
    timestamp: datetime = dataclass_field(default_factory=_utcnow)

    @property
    def commit_key(self) -> Tuple[str, str]:
        """One target per external field."""
        return self.field.key

    @property
    def import_key(self) -> Tuple[str, str, str, str]:
        return (self.target_node.name, self.target_node.type, self.field.name, self.field.field_type)

    @property
    def target_key(self) -> Tuple[str, str]:
        return (self.target_node.name, self.target_node.type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'targetNode': self.target_node.to_dict(),
            'field': self.field.to_dict(),
            'mappingDetails': self.mapping_details,
            'outputs': self.outputs,
            'timestamp': self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Mapping':
        """Parse the camelCase record shape exchanged with collaborators."""
        if not isinstance(data, dict):
            raise MappingRecordError(f"Mapping record must be an object, got {type(data).__name__}.")

        target = data.get('targetNode')
        fld = data.get('field')
        if not isinstance(target, dict) or not target.get('name'):
            raise MappingRecordError("Mapping record is missing targetNode.name.")
        if not isinstance(fld, dict) or not fld.get('name'):
            raise MappingRecordError("Mapping record is missing field.name.")

        target_id = _text(target.get('id'))
        target_path = target.get('path')
        if target_path is None:
            target_path = path_key_of(target_id)

        return cls(
            target_node=TargetNodeRef(
                id=target_id,
                name=_text(target.get('name')),
                type=_text(target.get('type')),
                path=_text(target_path),
            ),
            field=FieldRef(
                name=_text(fld.get('name')),
                field_type=_text(fld.get('fieldType')),
                field_essence=_optional_text(fld.get('fieldEssence')),
                dgh=_optional_text(fld.get('dgh')),
                always=_optional_text(fld.get('always')),
            ),
            mapping_details=_text(data.get('mappingDetails')),
            outputs=_text(data.get('outputs')),
            timestamp=parse_timestamp(data.get('timestamp')),
        )


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Epoch milliseconds.
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            return datetime.fromisoformat(text)
        except ValueError as e:
            raise MappingRecordError(f"Invalid mapping timestamp: {value!r}") from e
    return _utcnow()
