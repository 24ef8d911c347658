"""
Content Model
=============

Data structures shared by the resolver, the exporter and the stores.

Records are read-only snapshots: the export core never mutates them.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from operator import attrgetter
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================

class FieldCategory(str, Enum):
    """Where a column's value comes from. Values are the selection tags."""
    STANDARD = "std"
    CUSTOM = "acf"


class FieldType(str, Enum):
    """Declared type of a custom field. Governs how its value is flattened."""
    TEXT = "text"
    IMAGE = "image"
    IMAGE_GALLERY = "gallery"
    RELATIONSHIP = "relationship"
    POST_REFERENCE = "post_object"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: str | None) -> "FieldType":
        """Map a metadata type tag to a FieldType. Unknown tags are OTHER."""
        try:
            return cls(tag)
        except ValueError:
            return cls.OTHER


# =============================================================================
# FIELD SELECTION
# =============================================================================

@dataclass(frozen=True)
class FieldSelector:
    """One exportable column: a category plus a field name."""
    category: FieldCategory
    name: str

    @classmethod
    def parse(cls, token: str) -> "FieldSelector":
        """
        Parse a "<category>:<name>" selection token, e.g. "std:post_title".

        Raises:
            ValueError: If the delimiter or the category tag is missing.
        """
        tag, name = token.split(":", 1)
        return cls(FieldCategory(tag), name)

    @property
    def token(self) -> str:
        return f"{self.category.value}:{self.name}"


class CustomFieldDefinition(BaseModel):
    """A custom field as described by the metadata subsystem."""
    name: str = Field(..., min_length=1)
    label: str = ""
    field_type: FieldType = FieldType.OTHER


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class Record:
    """
    One content record: fixed standard attributes plus custom-field raw values.

    `meta` holds raw custom-field values keyed by field name.
    """
    id: int
    post_type: str
    post_author: Any = ""
    post_date: Any = ""
    post_date_gmt: Any = ""
    post_title: str = ""
    post_excerpt: str = ""
    post_status: str = ""
    comment_status: str = ""
    ping_status: str = ""
    post_password: str = ""
    post_name: str = ""
    to_ping: str = ""
    pinged: str = ""
    post_modified: Any = ""
    post_modified_gmt: Any = ""
    post_content_filtered: str = ""
    post_parent: Any = 0
    guid: str = ""
    menu_order: Any = 0
    post_mime_type: str = ""
    comment_count: Any = 0
    meta: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the custom-field table along with the record.
        object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Record":
        """
        Build a record from a flat mapping keyed by standard field names.

        Unknown keys are ignored; "meta" carries the custom-field values.
        """
        values = {
            attribute: data[key]
            for key, attribute in STANDARD_FIELD_ATTRIBUTES.items()
            if key in data and data[key] is not None
        }
        return cls(meta=data.get("meta") or {}, **values)


# =============================================================================
# STANDARD FIELDS
# =============================================================================

# Standard field key -> display label, in display order.
STANDARD_FIELDS: dict[str, str] = {
    "ID": "ID",
    "post_author": "Author ID",
    "post_date": "Date",
    "post_date_gmt": "Date GMT",
    "post_title": "Title",
    "post_excerpt": "Excerpt",
    "post_status": "Status",
    "comment_status": "Comment Status",
    "ping_status": "Ping Status",
    "post_password": "Password",
    "post_name": "Slug",
    "to_ping": "To Ping",
    "pinged": "Pinged",
    "post_modified": "Modified Date",
    "post_modified_gmt": "Modified Date GMT",
    "post_content_filtered": "Filtered Content",
    "post_parent": "Parent",
    "guid": "GUID",
    "menu_order": "Menu Order",
    "post_type": "Post Type",
    "post_mime_type": "MIME Type",
    "comment_count": "Comment Count",
}

# Standard field key -> Record attribute ("ID" is the only rename).
STANDARD_FIELD_ATTRIBUTES: dict[str, str] = {
    key: ("id" if key == "ID" else key) for key in STANDARD_FIELDS
}

# Standard field key -> accessor, built once.
STANDARD_FIELD_ACCESSORS: Mapping[str, Callable[[Record], Any]] = MappingProxyType({
    key: attrgetter(attribute)
    for key, attribute in STANDARD_FIELD_ATTRIBUTES.items()
})
