"""
Collaborator Interfaces
=======================

Narrow interfaces the export core calls into. The content store behind
them (record retrieval, field metadata, title lookup) is external to the
core; any object with these methods can be plugged in.
"""

from collections.abc import Iterable
from typing import Any, Protocol

from .models import CustomFieldDefinition, FieldType, Record


# =============================================================================
# EXCEPTIONS
# =============================================================================

class ContentSourceError(Exception):
    """Raised when a content collaborator cannot serve a request."""
    pass


class UnknownContentTypeError(ContentSourceError):
    """Raised when a content type does not exist in the store."""

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"Unknown content type: '{content_type}'.")


# =============================================================================
# PROTOCOLS
# =============================================================================

class MetadataProvider(Protocol):
    """Custom-field schema discovery."""

    def list_custom_fields(self, content_type: str) -> list[CustomFieldDefinition]: ...

    def get_field_type(self, name: str, content_type: str) -> FieldType: ...

    def get_raw_value(self, name: str, record: Record) -> Any: ...


class RecordSource(Protocol):
    """Record retrieval: every record of a type, all statuses, unpaginated."""

    def fetch_all_records(self, content_type: str) -> Iterable[Record]: ...


class TitleResolver(Protocol):
    """Resolves a record identifier to its display title."""

    def title_of(self, identifier: Any) -> str: ...
