"""
JSON Content Store
==================

File-backed content store implementing all three collaborator interfaces
(metadata, record retrieval, title resolution).

Document format:
{
  "content_types": {
    "recipe": {
      "label": "Recipes",
      "fields": [{"name": "hero", "label": "Hero Image", "type": "image"}]
    }
  },
  "records": [
    {"ID": 1, "post_type": "recipe", "post_title": "Soup",
     "meta": {"hero": {"url": "https://example.com/soup.jpg"}}}
  ]
}

Records are served in file order.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .collaborators import ContentSourceError, UnknownContentTypeError
from .models import CustomFieldDefinition, FieldType, Record


# =============================================================================
# EXCEPTIONS
# =============================================================================

class ContentStoreLoadError(ContentSourceError):
    """Raised when the store document cannot be read or is invalid."""
    pass


# =============================================================================
# DOCUMENT SCHEMA (Pydantic)
# =============================================================================

class FieldDocument(BaseModel):
    """Custom field entry as stored on disk."""
    name: str = Field(..., min_length=1)
    label: str = ""
    type: str = "text"


class ContentTypeDocument(BaseModel):
    """Content type entry as stored on disk."""
    label: str = ""
    fields: list[FieldDocument] = Field(default_factory=list)


class RecordDocument(BaseModel, extra="allow"):
    """Record entry; standard attributes beyond ID/post_type are optional."""
    ID: int
    post_type: str
    meta: dict[str, Any] = Field(default_factory=dict)


class StoreDocument(BaseModel):
    """Root of the store file."""
    content_types: dict[str, ContentTypeDocument] = Field(default_factory=dict)
    records: list[RecordDocument] = Field(default_factory=list)


# =============================================================================
# STORE
# =============================================================================

class JsonContentStore:
    """In-memory content store loaded from a JSON document."""

    def __init__(self, document: StoreDocument):
        self._labels: dict[str, str] = {}
        self._fields: dict[str, dict[str, CustomFieldDefinition]] = {}
        self._records: dict[str, list[Record]] = {}
        self._titles: dict[int, str] = {}

        for name, content_type in document.content_types.items():
            self._labels[name] = content_type.label or name
            self._fields[name] = {
                f.name: CustomFieldDefinition(
                    name=f.name,
                    label=f.label or f.name,
                    field_type=FieldType.from_tag(f.type),
                )
                for f in content_type.fields
            }
            self._records[name] = []

        for entry in document.records:
            record = Record.from_mapping(entry.model_dump())
            # Records of undeclared types still resolve as related titles.
            self._records.setdefault(record.post_type, [])
            self._labels.setdefault(record.post_type, record.post_type)
            self._fields.setdefault(record.post_type, {})
            self._records[record.post_type].append(record)
            self._titles[record.id] = record.post_title

    @classmethod
    def from_file(cls, path: str | Path) -> "JsonContentStore":
        """
        Load a store from a JSON file.

        Raises:
            ContentStoreLoadError: If the file is unreadable or invalid.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            document = StoreDocument.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise ContentStoreLoadError(f"Failed to load content store {path}: {e}") from e
        return cls(document)

    # -------------------------------------------------------------------------
    # Content types
    # -------------------------------------------------------------------------

    def list_content_types(self) -> dict[str, str]:
        """Content type name -> label."""
        return dict(self._labels)

    def _require(self, content_type: str) -> None:
        if content_type not in self._labels:
            raise UnknownContentTypeError(content_type)

    # -------------------------------------------------------------------------
    # MetadataProvider
    # -------------------------------------------------------------------------

    def list_custom_fields(self, content_type: str) -> list[CustomFieldDefinition]:
        self._require(content_type)
        return list(self._fields[content_type].values())

    def get_field_type(self, name: str, content_type: str) -> FieldType:
        definition = self._fields.get(content_type, {}).get(name)
        return definition.field_type if definition else FieldType.OTHER

    def get_raw_value(self, name: str, record: Record) -> Any:
        return record.meta.get(name)

    # -------------------------------------------------------------------------
    # RecordSource
    # -------------------------------------------------------------------------

    def fetch_all_records(self, content_type: str) -> list[Record]:
        self._require(content_type)
        return list(self._records[content_type])

    # -------------------------------------------------------------------------
    # TitleResolver
    # -------------------------------------------------------------------------

    def title_of(self, identifier: Any) -> str:
        return self._titles.get(identifier, "")
