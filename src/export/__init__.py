"""
Export Module
=============

Exports content records to CSV.

This is a deterministic export layer: field values are resolved, cleaned
and written in the order the collaborators provide them.
"""

from .csv_exporter import (
    CsvExporter,
    export_to_csv,
    ExportConfig,
    ExportResult,
    ExportErrorKind,
    CsvExportError,
    SourceUnavailableError,
    SinkWriteError,
    DEFAULT_LIST_MARKUP_FIELDS,
)

from .export_validators import (
    validate_csv_export,
    ExportValidationError,
)

__all__ = [
    # CSV
    "CsvExporter",
    "export_to_csv",
    "ExportConfig",
    "ExportResult",
    "DEFAULT_LIST_MARKUP_FIELDS",

    # Validation
    "validate_csv_export",

    # Exceptions
    "ExportErrorKind",
    "CsvExportError",
    "SourceUnavailableError",
    "SinkWriteError",
    "ExportValidationError",
]
