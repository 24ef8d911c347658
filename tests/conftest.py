"""
Shared pytest fixtures: stub collaborators, capturing sinks and a
small in-memory content store.
"""

import io

import pytest

from src.content.models import FieldType
from src.content.store import JsonContentStore, StoreDocument


class StubMetadata:
    """Metadata collaborator backed by a name -> FieldType dict."""

    def __init__(self, field_types: dict[str, FieldType]):
        self.field_types = field_types

    def list_custom_fields(self, content_type):
        return []

    def get_field_type(self, name, content_type):
        return self.field_types.get(name, FieldType.OTHER)

    def get_raw_value(self, name, record):
        return record.meta.get(name)


class StubTitles:
    """Title collaborator backed by an id -> title dict."""

    def __init__(self, titles: dict[int, str]):
        self.titles = titles
        self.calls = []

    def title_of(self, identifier):
        self.calls.append(identifier)
        return self.titles.get(identifier, "")


class StubSource:
    """Record source returning a fixed list, or raising a given error."""

    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error

    def fetch_all_records(self, content_type):
        if self.error is not None:
            raise self.error
        return self.records


class CapturingSink(io.BytesIO):
    """BytesIO that keeps its contents after being closed."""

    captured = b""

    def close(self):
        if not self.closed:
            self.captured = self.getvalue()
        super().close()

    def text(self) -> str:
        data = self.captured if self.closed else self.getvalue()
        return data.decode("utf-8")


class FailingSink(CapturingSink):
    """Sink whose write calls start failing after `ok_writes` successes."""

    def __init__(self, ok_writes: int):
        super().__init__()
        self.ok_writes = ok_writes

    def write(self, data):
        if self.ok_writes <= 0:
            raise OSError("disk full")
        self.ok_writes -= 1
        return super().write(data)


STORE_DOCUMENT = {
    "content_types": {
        "recipe": {
            "label": "Recipes",
            "fields": [
                {"name": "hero_image", "label": "Hero Image", "type": "image"},
                {"name": "gallery", "label": "Gallery", "type": "gallery"},
                {"name": "ingredients", "label": "Ingredients", "type": "wysiwyg"},
                {"name": "pairs_with", "label": "Pairs With", "type": "relationship"},
                {"name": "excerpt", "label": "Teaser", "type": "textarea"},
            ],
        },
        "page": {"label": "Pages", "fields": []},
    },
    "records": [
        {
            "ID": 5,
            "post_type": "recipe",
            "post_title": "Apple Pie",
            "post_excerpt": "It‚Äôs great",
            "post_status": "publish",
            "meta": {
                "hero_image": {"url": "https://example.com/pie.jpg"},
                "gallery": [{"url": "https://example.com/a.jpg"}, {"url": "https://example.com/b.jpg"}],
                "ingredients": "<ul><li>Apples</li><li>Butter</li></ul>",
                "pairs_with": [9],
                "excerpt": "Grandma‚Äôs recipe",
            },
        },
        {
            "ID": 9,
            "post_type": "recipe",
            "post_title": "Banana Bread",
            "post_status": "draft",
            "meta": {"hero_image": False, "pairs_with": [5, 12]},
        },
        {
            "ID": 12,
            "post_type": "fruit",
            "post_title": "Cherry",
        },
    ],
}


@pytest.fixture
def store():
    """Small JSON content store with two recipes and one related record."""
    return JsonContentStore(StoreDocument.model_validate(STORE_DOCUMENT))


@pytest.fixture
def sink():
    return CapturingSink()
