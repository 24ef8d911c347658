"""
API Request/Response Schemas
============================

Pydantic models for API request and response validation.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from src.content.models import FieldSelector, FieldType


# Content type names double as file name parts
CONTENT_TYPE_PATTERN = r"^[A-Za-z0-9_-]+$"


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ExportRequest(BaseModel):
    """Request body for POST /export endpoint."""

    content_type: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=CONTENT_TYPE_PATTERN,
        description="Content type to export (e.g. 'post', 'recipe')"
    )
    fields: list[str] = Field(
        ...,
        min_length=1,
        description="Columns in output order, as 'std:<name>' or 'acf:<name>'"
    )

    @field_validator("fields")
    @classmethod
    def validate_field_tokens(cls, fields: list[str]) -> list[str]:
        for token in fields:
            try:
                selector = FieldSelector.parse(token)
            except ValueError as e:
                raise ValueError(
                    f"Invalid field '{token}': expected 'std:<name>' or 'acf:<name>'"
                ) from e
            if not selector.name:
                raise ValueError(f"Invalid field '{token}': empty field name")
        return fields

    def selectors(self) -> list[FieldSelector]:
        return [FieldSelector.parse(token) for token in self.fields]


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ContentTypeInfo(BaseModel):
    """One exportable content type."""

    name: str
    label: str


class ContentTypesResponse(BaseModel):
    """Response for GET /content-types."""

    content_types: list[ContentTypeInfo] = Field(default_factory=list)


class FieldOption(BaseModel):
    """One selectable column, as offered to the operator."""

    token: str = Field(..., description="Selection token, e.g. 'std:post_title'")
    name: str
    label: str
    field_type: Optional[FieldType] = None


class FieldsResponse(BaseModel):
    """Response for GET /content-types/{content_type}/fields."""

    content_type: str
    standard: list[FieldOption] = Field(default_factory=list)
    custom: list[FieldOption] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    status: str = "ok"


class VersionResponse(BaseModel):
    """Response for GET /version endpoint."""

    version: str
    name: str = "Advanced Post Exporter"
