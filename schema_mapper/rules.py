from __future__ import annotations

import json
from typing import Any, List, Optional

# Render order of validation keywords.
RULE_KEYWORDS = (
    'enum',
    'const',
    'pattern',
    'minLength',
    'maxLength',
    'format',
    'minimum',
    'maximum',
    'exclusiveMinimum',
    'exclusiveMaximum',
    'multipleOf',
)


def _json_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value, ensure_ascii=False, default=str)


def _scalar_text(value: Any) -> str:
    """Render a keyword value the way it reads in JSON (true, null, 10 not 10.0)."""
    if value is None or isinstance(value, (bool, float)):
        return _json_text(value)
    return str(value)


def format_rule(keyword: str, value: Any) -> str:
    if keyword == 'enum':
        if isinstance(value, (list, tuple)):
            return f"enum: {', '.join(_json_text(v) for v in value)}"
        return f"enum: {value}"
    if keyword == 'const':
        return f"const: {_json_text(value)}"
    return f"{keyword}: {_scalar_text(value)}"


def extract_rules(schema: Any) -> Optional[List[str]]:
    """Render the validation keywords of a schema node as readable strings.

    Returns None (never an empty list) when no keyword is present.
    """
    if not isinstance(schema, dict):
        return None
    rules = [
        format_rule(keyword, schema[keyword])
        for keyword in RULE_KEYWORDS
        if keyword in schema and (keyword == 'const' or schema[keyword] is not None)
    ]
    return rules or None
