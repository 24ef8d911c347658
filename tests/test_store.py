"""
Tests for the JSON content store and the export validator.
"""

import json
from pathlib import Path

import pytest

from src.content.collaborators import UnknownContentTypeError
from src.content.models import FieldType
from src.content.store import ContentStoreLoadError, JsonContentStore
from src.export import ExportValidationError, export_to_csv, validate_csv_export

from conftest import STORE_DOCUMENT, CapturingSink


SAMPLE_CONTENT = Path(__file__).parent.parent / "data" / "content.json"


# =============================================================================
# STORE
# =============================================================================

def test_from_file(tmp_path):
    path = tmp_path / "content.json"
    path.write_text(json.dumps(STORE_DOCUMENT), encoding="utf-8")

    store = JsonContentStore.from_file(path)

    assert store.list_content_types() == {"recipe": "Recipes", "page": "Pages", "fruit": "fruit"}
    assert [r.id for r in store.fetch_all_records("recipe")] == [5, 9]


def test_missing_file_raises_load_error(tmp_path):
    with pytest.raises(ContentStoreLoadError):
        JsonContentStore.from_file(tmp_path / "missing.json")


@pytest.mark.parametrize("content", [
    "{not json",
    json.dumps({"records": [{"post_title": "no id"}]}),
])
def test_invalid_document_raises_load_error(tmp_path, content):
    path = tmp_path / "content.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ContentStoreLoadError):
        JsonContentStore.from_file(path)


def test_custom_field_definitions(store):
    fields = {f.name: f for f in store.list_custom_fields("recipe")}

    assert fields["hero_image"].label == "Hero Image"
    assert fields["hero_image"].field_type is FieldType.IMAGE
    assert fields["gallery"].field_type is FieldType.IMAGE_GALLERY
    assert fields["ingredients"].field_type is FieldType.OTHER


def test_field_type_of_undeclared_field_is_other(store):
    assert store.get_field_type("nope", "recipe") is FieldType.OTHER
    assert store.get_field_type("hero_image", "no_such_type") is FieldType.OTHER


def test_unknown_content_type(store):
    with pytest.raises(UnknownContentTypeError):
        store.fetch_all_records("no_such_type")
    with pytest.raises(UnknownContentTypeError):
        store.list_custom_fields("no_such_type")


def test_title_lookup(store):
    assert store.title_of(12) == "Cherry"
    assert store.title_of(999) == ""


def test_record_standard_attributes(store):
    record = store.fetch_all_records("recipe")[0]

    assert record.id == 5
    assert record.post_status == "publish"
    assert record.meta["pairs_with"] == [9]


def test_sample_content_exports_cleanly():
    store = JsonContentStore.from_file(SAMPLE_CONTENT)
    sink = CapturingSink()

    fields = ["std:post_title", "std:post_excerpt", "acf:ingredients", "acf:pairs_with", "acf:nutrition"]
    result = export_to_csv(store, "recipe", fields, sink)

    text = sink.text()
    assert result.rows_written == 2
    assert "Jalapeño Cornbread" in text
    assert "It’s sweet, spicy & done in 30 minutes" in text
    assert "A weeknight classic—ready in an hour" in text
    assert "- 1 cup cornmeal\n- 2 jalapeños, diced\n" in text
    assert '"{""calories"":210,""protein"":""5g""}"' in text


# =============================================================================
# VALIDATOR
# =============================================================================

def _write(tmp_path, text) -> Path:
    path = tmp_path / "export.csv"
    path.write_text(text, encoding="utf-8", newline="")
    return path


def test_validate_accepts_rectangular_file(tmp_path):
    path = _write(tmp_path, 'ID,post_title\r\n1,"a, b"\r\n2,c\r\n')
    assert validate_csv_export(path, ["ID", "post_title"], 2)


def test_validate_rejects_ragged_rows(tmp_path):
    path = _write(tmp_path, "ID,post_title\r\n1\r\n")
    with pytest.raises(ExportValidationError):
        validate_csv_export(path)


def test_validate_rejects_wrong_header_or_count(tmp_path):
    path = _write(tmp_path, "ID\r\n1\r\n")
    with pytest.raises(ExportValidationError):
        validate_csv_export(path, expected_columns=["post_title"])
    with pytest.raises(ExportValidationError):
        validate_csv_export(path, expected_rows=3)


def test_validate_rejects_missing_or_empty_file(tmp_path):
    with pytest.raises(ExportValidationError):
        validate_csv_export(tmp_path / "missing.csv")
    with pytest.raises(ExportValidationError):
        validate_csv_export(_write(tmp_path, ""))
