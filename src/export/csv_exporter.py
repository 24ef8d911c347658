"""
CSV Exporter
============

Exports every record of one content type to CSV.
One header row of bare field names, then one row per record.
"""

import csv
import io
import logging
from collections.abc import Iterable, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, BinaryIO

from src.content.collaborators import (
    ContentSourceError,
    MetadataProvider,
    RecordSource,
    TitleResolver,
)
from src.content.models import FieldCategory, FieldSelector, Record
from src.fields.resolver import FieldResolver
from src.normalize.text import (
    DEFAULT_REPLACEMENTS,
    html_list_to_plain_text,
    repair_special_characters,
)


logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class ExportErrorKind(str, Enum):
    SOURCE_UNAVAILABLE = "source_unavailable"
    SINK_WRITE_FAILED = "sink_write_failed"


class CsvExportError(Exception):
    """Raised when CSV export fails."""

    kind: ExportErrorKind

    def __init__(self, message: str, rows_written: int = 0):
        self.rows_written = rows_written
        super().__init__(message)


class SourceUnavailableError(CsvExportError):
    """Raised when records cannot be retrieved. Nothing has been written."""
    kind = ExportErrorKind.SOURCE_UNAVAILABLE


class SinkWriteError(CsvExportError):
    """Raised when the output sink fails mid-write. Output may be partial."""
    kind = ExportErrorKind.SINK_WRITE_FAILED


# =============================================================================
# CONSTANTS
# =============================================================================

# Fields that may carry HTML list markup
DEFAULT_LIST_MARKUP_FIELDS = frozenset({"ingredients", "instruction"})

# Fields holding excerpt text, per category
DEFAULT_EXCERPT_FIELDS: Mapping[FieldCategory, frozenset[str]] = MappingProxyType({
    FieldCategory.STANDARD: frozenset({"post_excerpt"}),
    FieldCategory.CUSTOM: frozenset({"excerpt"}),
})

OUTPUT_ENCODING = "utf-8"


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class ExportConfig:
    """Post-processing settings, fixed for the lifetime of an exporter."""
    list_markup_fields: frozenset[str] = DEFAULT_LIST_MARKUP_FIELDS
    excerpt_fields: Mapping[FieldCategory, frozenset[str]] = field(
        default_factory=lambda: DEFAULT_EXCERPT_FIELDS
    )
    replacements: tuple[tuple[str, str], ...] = DEFAULT_REPLACEMENTS

    def __post_init__(self):
        # Freeze caller-supplied collections
        object.__setattr__(self, "list_markup_fields", frozenset(self.list_markup_fields))
        object.__setattr__(self, "excerpt_fields", MappingProxyType({
            category: frozenset(names) for category, names in self.excerpt_fields.items()
        }))
        object.__setattr__(self, "replacements", tuple(tuple(pair) for pair in self.replacements))


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a completed export."""
    content_type: str
    columns: list[str]
    rows_written: int


# =============================================================================
# EXPORTER
# =============================================================================

class CsvExporter:
    """
    Writes one content type to a CSV byte sink.

    Args:
        metadata: Custom-field metadata collaborator.
        source: Record retrieval collaborator.
        titles: Title-resolution collaborator.
        config: Post-processing settings.
    """

    def __init__(
        self,
        metadata: MetadataProvider,
        source: RecordSource,
        titles: TitleResolver,
        config: ExportConfig | None = None
    ):
        self.source = source
        self.config = config or ExportConfig()
        self.resolver = FieldResolver(metadata, titles)

    def export(
        self,
        content_type: str,
        selected_fields: Sequence[FieldSelector],
        sink: BinaryIO
    ) -> ExportResult:
        """
        Export all records of `content_type` to `sink`, then close it.

        Args:
            content_type: Content type to export.
            selected_fields: Columns, in output order.
            sink: Binary writable stream.

        Returns:
            ExportResult with the header and data row count.

        Raises:
            SourceUnavailableError: If records cannot be retrieved.
            SinkWriteError: If writing to the sink fails.
        """
        records = self._fetch_records(content_type)
        columns = [selector.name for selector in selected_fields]

        logger.info(
            "Exporting %d %s records with %d columns",
            len(records), content_type, len(columns)
        )

        # write_through: each row reaches the sink before the next is built
        stream = io.TextIOWrapper(
            sink, encoding=OUTPUT_ENCODING, newline="", write_through=True
        )
        writer = csv.writer(stream)
        rows_written = 0

        # Rows are built outside the sink guard; only writes count as sink failures
        with self._sink_guard(content_type, rows_written):
            writer.writerow(columns)

        for record in records:
            row = self.build_row(record, selected_fields)
            with self._sink_guard(content_type, rows_written):
                writer.writerow(row)
            rows_written += 1

        with self._sink_guard(content_type, rows_written):
            stream.flush()
            stream.close()

        logger.info("Exported %d %s records", rows_written, content_type)
        return ExportResult(content_type, columns, rows_written)

    def build_row(self, record: Record, selected_fields: Iterable[FieldSelector]) -> list[Any]:
        """Resolve and post-process every selected cell of one record."""
        return [
            self._post_process(selector, self.resolver.resolve_field(selector, record))
            for selector in selected_fields
        ]

    def _post_process(self, selector: FieldSelector, value: Any) -> Any:
        """Excerpt repair, then list flattening, on text values only."""
        if not isinstance(value, str):
            return value

        if selector.name in self.config.excerpt_fields.get(selector.category, ()):
            value = repair_special_characters(value, self.config.replacements)

        if selector.name in self.config.list_markup_fields:
            value = html_list_to_plain_text(value)

        return value

    @staticmethod
    @contextmanager
    def _sink_guard(content_type: str, rows_written: int):
        """Turn sink I/O failures into SinkWriteError."""
        try:
            yield
        except (OSError, ValueError) as e:
            # ValueError: write to a sink that was closed underneath us
            logger.exception(
                "Export of %s aborted after %d rows", content_type, rows_written
            )
            raise SinkWriteError(
                f"Failed to write {content_type} export: {e}",
                rows_written=rows_written
            ) from e

    def _fetch_records(self, content_type: str) -> list[Record]:
        try:
            return list(self.source.fetch_all_records(content_type))
        except (ContentSourceError, OSError) as e:
            raise SourceUnavailableError(
                f"Could not retrieve {content_type} records: {e}"
            ) from e


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_to_csv(
    store: Any,
    content_type: str,
    selected_fields: Sequence[str | FieldSelector],
    sink: BinaryIO,
    config: ExportConfig | None = None
) -> ExportResult:
    """
    Export a content type using one store for all three collaborators.

    Args:
        store: Object implementing metadata, retrieval and title lookup.
        content_type: Content type to export.
        selected_fields: "std:<name>" / "acf:<name>" tokens or FieldSelectors.
        sink: Binary writable stream; closed when the export completes.
        config: Optional post-processing settings.

    Returns:
        ExportResult.

    Raises:
        CsvExportError: If export fails.
    """
    selectors = [
        s if isinstance(s, FieldSelector) else FieldSelector.parse(s)
        for s in selected_fields
    ]
    exporter = CsvExporter(store, store, store, config)
    return exporter.export(content_type, selectors, sink)
