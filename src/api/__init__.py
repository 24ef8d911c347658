"""
API Module
==========

API routes and schemas.
"""

from .schemas import (
    ExportRequest,
    ContentTypeInfo,
    ContentTypesResponse,
    FieldOption,
    FieldsResponse,
    HealthResponse,
    VersionResponse,
)

__all__ = [
    "ExportRequest",
    "ContentTypeInfo",
    "ContentTypesResponse",
    "FieldOption",
    "FieldsResponse",
    "HealthResponse",
    "VersionResponse",
]
