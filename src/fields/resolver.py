"""
Field Resolver
==============

Flattens one field of one record into a CSV cell value.

Standard fields are read through a fixed accessor table. Custom fields are
dispatched on their declared FieldType:

  IMAGE            -> the image URL
  IMAGE_GALLERY    -> comma-joined image URLs
  RELATIONSHIP     -> comma-joined related titles
  POST_REFERENCE   -> same as RELATIONSHIP
  TEXT / OTHER     -> scalar as-is, structured values as compact JSON

Malformed custom-field data never raises; it degrades to an empty cell.
"""

import dataclasses
import json
import logging
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any

from src.content.collaborators import MetadataProvider, TitleResolver
from src.content.models import (
    FieldCategory,
    FieldSelector,
    FieldType,
    Record,
    STANDARD_FIELD_ACCESSORS,
)


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

EMPTY_CELL = ""

# Separator for multi-valued cells (galleries, relationships).
LIST_SEPARATOR = ","


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

class FieldResolver:
    """
    Resolves FieldSelectors against records.

    Args:
        metadata: Custom-field metadata collaborator.
        titles: Title-resolution collaborator for relationship fields.
    """

    def __init__(self, metadata: MetadataProvider, titles: TitleResolver):
        self.metadata = metadata
        self.titles = titles

    def resolve_field(self, selector: FieldSelector, record: Record) -> Any:
        """Return the flat cell value of `selector` for `record`."""
        if selector.category is FieldCategory.STANDARD:
            return resolve_standard_field(selector.name, record)
        return self.resolve_custom_field(selector.name, record)

    def resolve_custom_field(self, name: str, record: Record) -> Any:
        """Fetch a custom field's raw value and type, then flatten it."""
        try:
            value = self.metadata.get_raw_value(name, record)
            field_type = self.metadata.get_field_type(name, record.post_type)
        except LookupError:
            logger.debug("No custom field '%s' on record %s", name, record.id)
            return EMPTY_CELL

        if field_type is FieldType.IMAGE:
            return _image_url(value)
        if field_type is FieldType.IMAGE_GALLERY:
            return _gallery_urls(value)
        if field_type in (FieldType.RELATIONSHIP, FieldType.POST_REFERENCE):
            return self._related_titles(value)
        return _flatten_value(value)

    def _related_titles(self, value: Any) -> str:
        """Resolve a relationship value (ids and/or records) to titles."""
        if _is_sequence(value):
            titles = [self._title_of(item) for item in value]
            return LIST_SEPARATOR.join(t for t in titles if t is not None)

        title = self._title_of(value)
        return EMPTY_CELL if title is None else title

    def _title_of(self, item: Any) -> str | None:
        """Title of a record-like item or a bare identifier; None if neither."""
        title = _record_title(item)
        if title is not None:
            return title
        if _is_identifier(item):
            try:
                return self.titles.title_of(int(item))
            except (LookupError, ValueError):
                # ValueError: digit strings past the int conversion limit
                logger.debug("No title for related id %.40s", item)
                return None
        return None


def resolve_standard_field(name: str, record: Record) -> Any:
    """Read a standard attribute; unknown names and None become empty."""
    accessor = STANDARD_FIELD_ACCESSORS.get(name)
    if accessor is None:
        return EMPTY_CELL
    value = accessor(record)
    return EMPTY_CELL if value is None else value


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _is_sequence(value: Any) -> bool:
    """True for list-like values, excluding strings and bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_identifier(value: Any) -> bool:
    """True for record ids: ints or digit-only strings (bools excluded)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and value.strip().isdecimal()


def _url_of(value: Any) -> str | None:
    """URL exposed by an image mapping or object, if any."""
    if isinstance(value, Mapping):
        url = value.get("url")
    else:
        url = getattr(value, "url", None)
    return url if isinstance(url, str) else None


def _image_url(value: Any) -> str:
    url = _url_of(value)
    return EMPTY_CELL if url is None else url


def _gallery_urls(value: Any) -> str:
    if not _is_sequence(value):
        return EMPTY_CELL
    urls = [_url_of(item) for item in value]
    return LIST_SEPARATOR.join(url for url in urls if url is not None)


def _record_title(value: Any) -> str | None:
    """Title carried by an already-resolved record-like value."""
    if isinstance(value, Record):
        return value.post_title
    if isinstance(value, Mapping):
        title = value.get("post_title")
    else:
        title = getattr(value, "post_title", None)
    return None if title is None else str(title)


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_structured(value: Any) -> bool:
    """True for values that need JSON: mappings, lists, sets and objects."""
    if isinstance(value, (str, bytes, bytearray, int, float, Enum)):
        return False
    return (
        isinstance(value, (Mapping, Set))
        or _is_sequence(value)
        or _is_dataclass_instance(value)
        or hasattr(value, "__dict__")
    )


def _flatten_value(value: Any) -> Any:
    """Scalars pass through; structured values become compact JSON."""
    if value is None:
        return EMPTY_CELL
    if not _is_structured(value):
        return value
    try:
        return json.dumps(
            _plain(value),
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
    except (TypeError, ValueError, RecursionError):
        # Circular references or unsupported keys
        logger.debug("Could not serialize custom field value of type %s", type(value).__name__)
        return EMPTY_CELL


def _plain(value: Any) -> Any:
    """Convert mappings, sets, dataclasses and objects into json-encodable values."""
    if isinstance(value, (str, bytes, bytearray, int, float, Enum)) or value is None:
        return value
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if _is_sequence(value):
        return [_plain(item) for item in value]
    if isinstance(value, Set):
        try:
            items = sorted(value)
        except TypeError:
            items = list(value)
        return [_plain(item) for item in items]
    # fields() rather than asdict(): asdict deep-copies, which fails on mappingproxy
    if _is_dataclass_instance(value):
        return {f.name: _plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if hasattr(value, "__dict__"):
        return {key: _plain(item) for key, item in vars(value).items()}
    return value
