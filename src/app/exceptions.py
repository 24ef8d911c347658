"""
Application Exceptions
======================

Maps internal exceptions to HTTP status codes.
"""

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


# =============================================================================
# EXCEPTION MAPPING
# =============================================================================

# Maps exception class names to (status_code, user_message).
# Lookup walks the class hierarchy, so subclasses inherit their base entry.
EXCEPTION_MAP = {
    # Content store
    "UnknownContentTypeError": (404, "Unknown content type."),
    "ContentStoreLoadError": (503, "Content store is unavailable."),
    "ContentSourceError": (503, "Content store is unavailable."),

    # Export
    "SourceUnavailableError": (503, "Could not retrieve records for export."),
    "SinkWriteError": (500, "Failed to write CSV export."),
    "CsvExportError": (500, "Failed to export CSV."),
    "ExportValidationError": (500, "Exported file failed validation."),
}

FALLBACK = (500, "Internal system error.")


def _lookup(exc: Exception) -> tuple[int, str]:
    """Find the mapping for the most specific class of `exc`."""
    for cls in type(exc).__mro__:
        if cls.__name__ in EXCEPTION_MAP:
            return EXCEPTION_MAP[cls.__name__]
    return FALLBACK


def _error_body(exc: Exception, user_message: str) -> dict:
    return {
        "status": "error",
        "message": user_message,
        "detail": str(exc)
    }


def get_http_exception(exc: Exception) -> HTTPException:
    """
    Convert an internal exception to an HTTPException.

    Args:
        exc: The caught exception.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    status_code, user_message = _lookup(exc)
    return HTTPException(status_code=status_code, detail=_error_body(exc, user_message))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.

    Catches all unhandled exceptions and returns structured error response.
    """
    status_code, user_message = _lookup(exc)
    return JSONResponse(status_code=status_code, content=_error_body(exc, user_message))
