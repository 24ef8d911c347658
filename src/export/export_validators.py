"""
Export Validators
=================

Validates exported CSV files for correctness.
Performs sanity checks on header, row width and row count.
"""

import csv
from pathlib import Path


# =============================================================================
# EXCEPTIONS
# =============================================================================

class ExportValidationError(Exception):
    """Raised when export validation fails."""
    pass


# =============================================================================
# CSV VALIDATION
# =============================================================================

def validate_csv_export(
    file_path: str | Path,
    expected_columns: list[str] | None = None,
    expected_rows: int | None = None
) -> bool:
    """
    Validate a CSV file is rectangular with the expected header and rows.

    Args:
        file_path: Path to the CSV file.
        expected_columns: Optional exact header row.
        expected_rows: Optional number of data rows (header excluded).

    Returns:
        True if the file is valid.

    Raises:
        ExportValidationError: If validation fails.
    """
    path = Path(file_path)
    if not path.exists():
        raise ExportValidationError(f"CSV file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise ExportValidationError(f"Failed to read CSV {path}: {e}") from e

    if len(rows) == 0:
        raise ExportValidationError(f"CSV file is empty: {path}")

    # First row should be header
    header = rows[0]
    if expected_columns is not None and header != expected_columns:
        raise ExportValidationError(
            f"CSV header {header} does not match expected {expected_columns}"
        )

    for line_number, row in enumerate(rows[1:], start=2):
        if len(row) != len(header):
            raise ExportValidationError(
                f"CSV row {line_number} has {len(row)} columns, expected {len(header)}: {path}"
            )

    actual = len(rows) - 1  # Exclude header
    if expected_rows is not None and actual != expected_rows:
        raise ExportValidationError(
            f"CSV {path.name} has {actual} rows, expected {expected_rows}"
        )

    return True
