from __future__ import annotations


class SchemaMapperError(Exception):
    """Base error for schema_mapper."""


class DocumentLoadError(SchemaMapperError):
    """An uploaded document could not be read or parsed as JSON."""


class MappingRecordError(SchemaMapperError):
    """A mapping record is missing its target or field identity."""
