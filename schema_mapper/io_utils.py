from __future__ import annotations

import json
from typing import Any, List

from .exceptions import DocumentLoadError, MappingRecordError
from .records import Mapping


def read_json_content(file_obj) -> Any:
    """Read JSON content from an uploaded file, a file path, or a JSON string."""
    if file_obj is None:
        raise DocumentLoadError("No file uploaded.")

    try:
        if hasattr(file_obj, 'read'):
            if hasattr(file_obj, 'seek'):
                file_obj.seek(0)
            content = file_obj.read()
            if isinstance(content, bytes):
                content = content.decode('utf-8')
            return json.loads(content)

        path = file_obj.name if hasattr(file_obj, 'name') else file_obj
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        raise DocumentLoadError(f"Error parsing JSON: {e}") from e


def parse_json_text(text: str) -> Any:
    if not text or not text.strip():
        raise DocumentLoadError("No JSON provided.")
    try:
        return json.loads(text)
    except ValueError as e:
        raise DocumentLoadError(f"Error parsing JSON: {e}") from e


def parse_mapping_records(payload: Any) -> List[Mapping]:
    """Turn a decoded JSON payload into Mapping records.

    Accepts a list of records or an object with a ``mappings`` list.
    """
    if isinstance(payload, dict) and isinstance(payload.get('mappings'), list):
        payload = payload['mappings']
    if not isinstance(payload, list):
        raise MappingRecordError("Expected a list of mapping records.")

    records: List[Mapping] = []
    for idx, item in enumerate(payload):
        try:
            records.append(Mapping.from_dict(item))
        except MappingRecordError as e:
            raise MappingRecordError(f"Record {idx}: {e}") from e
    return records
