"""Pydantic models for the validation API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ValidateRequest(BaseModel):
    """Validate a value against an inline JSON Schema."""

    model_config = ConfigDict(populate_by_name=True)

    json_schema: dict[str, Any] = Field(..., alias="schema", description="JSON Schema document")
    data: Any = Field(..., description="Value to validate")


class ValidateStoredRequest(BaseModel):
    """Validate a value against a stored JSON Schema."""

    data: Any = Field(..., description="Value to validate")
