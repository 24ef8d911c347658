"""
API Routes
==========

Endpoint definitions for the Post Exporter API.
Implements the operator workflow:
  1. GET /content-types - Pick a content type
  2. GET /content-types/{content_type}/fields - Pick standard and custom fields
  3. POST /export - Download the CSV

This module wires the export core to HTTP without adding business logic.
"""

import logging
import os
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from .schemas import (
    ExportRequest,
    ContentTypeInfo,
    ContentTypesResponse,
    FieldOption,
    FieldsResponse,
    HealthResponse,
    VersionResponse,
)

# Import export core
from src.content.models import FieldCategory, FieldSelector, STANDARD_FIELDS
from src.content.store import JsonContentStore
from src.export import (
    CsvExporter,
    CsvExportError,
    ExportResult,
    SinkWriteError,
    validate_csv_export,
)

# Import config and utilities
from src.app import config as app_config
from src.app import exceptions as app_exceptions
from src.app import artifact_writer


logger = logging.getLogger(__name__)


# =============================================================================
# ROUTER
# =============================================================================

router = APIRouter()

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


# =============================================================================
# HELPERS
# =============================================================================

def _download_name(content_type: str) -> str:
    return f"export-{content_type}.csv"


def _discard(path: Path) -> None:
    """Remove an export file; a file that is already gone is fine."""
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove export file %s", path, exc_info=True)


def _run_export(
    store: JsonContentStore,
    content_type: str,
    selectors: list[FieldSelector],
    output_path: Path
) -> ExportResult:
    """Export to `output_path` and verify the written file."""
    exporter = CsvExporter(store, store, store, app_config.get_export_config())

    try:
        sink = open(output_path, "wb")
    except OSError as e:
        raise SinkWriteError(f"Cannot open {output_path}: {e}") from e

    with sink:
        result = exporter.export(content_type, selectors, sink)

    validate_csv_export(output_path, result.columns, result.rows_written)
    return result


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("/content-types", response_model=ContentTypesResponse)
def list_content_types(
    store: JsonContentStore = Depends(app_config.get_content_store)
) -> ContentTypesResponse:
    """List the content types available for export."""
    return ContentTypesResponse(content_types=[
        ContentTypeInfo(name=name, label=label)
        for name, label in store.list_content_types().items()
    ])


@router.get("/content-types/{content_type}/fields", response_model=FieldsResponse)
def list_fields(
    content_type: str,
    store: JsonContentStore = Depends(app_config.get_content_store)
) -> FieldsResponse:
    """
    List the standard and custom fields that can be exported for a type.

    Each option carries the token to send back in POST /export.
    """
    try:
        custom_fields = store.list_custom_fields(content_type)
    except Exception as e:
        raise app_exceptions.get_http_exception(e)

    standard = [
        FieldOption(
            token=FieldSelector(FieldCategory.STANDARD, key).token,
            name=key,
            label=label,
        )
        for key, label in STANDARD_FIELDS.items()
    ]
    custom = [
        FieldOption(
            token=FieldSelector(FieldCategory.CUSTOM, definition.name).token,
            name=definition.name,
            label=definition.label,
            field_type=definition.field_type,
        )
        for definition in custom_fields
    ]
    return FieldsResponse(content_type=content_type, standard=standard, custom=custom)


@router.post("/export", response_class=FileResponse)
def export_csv(
    request: ExportRequest,
    store: JsonContentStore = Depends(app_config.get_content_store)
) -> FileResponse:
    """
    Export every record of a content type (any status) to CSV.

    The file is returned as an attachment and removed once it has been
    sent. An export manifest artifact records whether the run completed
    or aborted, and how many rows were written.
    """
    run_id = artifact_writer.get_run_id()
    output_path = Path(app_config.get_output_dir()) / f"export-{request.content_type}-{run_id}.csv"

    try:
        result = _run_export(store, request.content_type, request.selectors(), output_path)

    except CsvExportError as e:
        _discard(output_path)
        artifact_writer.write_export_manifest(
            run_id,
            request.content_type,
            request.fields,
            status="aborted",
            rows_written=e.rows_written,
            error=str(e),
        )
        raise app_exceptions.get_http_exception(e)

    except Exception as e:
        _discard(output_path)
        logger.exception("Export run %s failed", run_id)
        artifact_writer.write_export_manifest(
            run_id,
            request.content_type,
            request.fields,
            status="failed",
            rows_written=0,
            error=str(e),
        )
        raise app_exceptions.get_http_exception(e)

    artifact_writer.write_export_manifest(
        run_id,
        request.content_type,
        request.fields,
        status="completed",
        rows_written=result.rows_written,
    )

    return FileResponse(
        output_path,
        media_type=CSV_MEDIA_TYPE,
        filename=_download_name(request.content_type),
        background=BackgroundTask(os.remove, output_path),
    )


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok")


@router.get("/version", response_model=VersionResponse)
def get_version() -> VersionResponse:
    """Get API version."""
    return VersionResponse(version=app_config.VERSION, name=app_config.APP_NAME)
