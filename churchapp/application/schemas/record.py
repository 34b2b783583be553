"""Pydantic DTOs for the records API.

Record bodies themselves are free-form JSON objects whose keys are
checked against the entity catalog, so only the envelopes are modelled.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation or error message."""

    message: str


class ValidationErrorResponse(BaseModel):
    """Field-level validation failures keyed by field name."""

    message: str = "Validation failed"
    errors: dict[str, str]
