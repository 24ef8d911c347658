"""
Application Configuration
=========================

Central configuration for the API.
"""

import os
from functools import lru_cache
from pathlib import Path

from src.content.store import JsonContentStore
from src.export.csv_exporter import DEFAULT_LIST_MARKUP_FIELDS, ExportConfig


# =============================================================================
# VERSION
# =============================================================================

VERSION = "2.0.0"
APP_NAME = "Advanced Post Exporter"

PROJECT_ROOT = Path(__file__).parent.parent.parent


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("APE_LOG_LEVEL", "INFO").upper()


# =============================================================================
# OUTPUT DIRECTORY
# =============================================================================

# Default output directory (can be overridden via environment variable)
OUTPUT_DIR = os.environ.get(
    "APE_OUTPUT_DIR",
    str(PROJECT_ROOT / "output")
)


def get_output_dir() -> str:
    """
    Get the output directory path, creating it if it doesn't exist.

    Returns:
        Absolute path to output directory.
    """
    output_path = Path(OUTPUT_DIR)
    output_path.mkdir(parents=True, exist_ok=True)
    return str(output_path.resolve())


# =============================================================================
# CONTENT STORE
# =============================================================================

CONTENT_PATH = os.environ.get(
    "APE_CONTENT_PATH",
    str(PROJECT_ROOT / "data" / "content.json")
)


@lru_cache(maxsize=1)
def get_content_store() -> JsonContentStore:
    """
    Load the content store once per process.

    Raises:
        ContentStoreLoadError: If the store file is missing or invalid.
    """
    return JsonContentStore.from_file(CONTENT_PATH)


# =============================================================================
# EXPORT SETTINGS
# =============================================================================

def _parse_field_list(raw: str | None) -> frozenset[str]:
    """Parse a comma-separated list of field names."""
    if raw is None:
        return DEFAULT_LIST_MARKUP_FIELDS
    return frozenset(name.strip() for name in raw.split(",") if name.strip())


# Fields whose values may contain HTML list markup
LIST_MARKUP_FIELDS = _parse_field_list(os.environ.get("APE_LIST_MARKUP_FIELDS"))


def get_export_config() -> ExportConfig:
    """Build the immutable exporter settings from environment configuration."""
    return ExportConfig(list_markup_fields=LIST_MARKUP_FIELDS)
