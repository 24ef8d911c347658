"""
Fields Module
=============

Resolves exportable fields of a record into flat cell values.
"""

from .resolver import (
    FieldResolver,
    resolve_standard_field,
    EMPTY_CELL,
    LIST_SEPARATOR,
)

__all__ = [
    "FieldResolver",
    "resolve_standard_field",
    "EMPTY_CELL",
    "LIST_SEPARATOR",
]
