"""
Content Module
==============

Content model, collaborator interfaces, and the JSON-backed store.
"""

from .models import (
    FieldCategory,
    FieldType,
    FieldSelector,
    CustomFieldDefinition,
    Record,
    STANDARD_FIELDS,
    STANDARD_FIELD_ACCESSORS,
)

from .collaborators import (
    MetadataProvider,
    RecordSource,
    TitleResolver,
    ContentSourceError,
    UnknownContentTypeError,
)

from .store import (
    JsonContentStore,
    ContentStoreLoadError,
)

__all__ = [
    # Model
    "FieldCategory",
    "FieldType",
    "FieldSelector",
    "CustomFieldDefinition",
    "Record",
    "STANDARD_FIELDS",
    "STANDARD_FIELD_ACCESSORS",

    # Collaborators
    "MetadataProvider",
    "RecordSource",
    "TitleResolver",

    # Store
    "JsonContentStore",

    # Exceptions
    "ContentSourceError",
    "UnknownContentTypeError",
    "ContentStoreLoadError",
]
