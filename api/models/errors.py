"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel


class ValidationErrorResponse(BaseModel):
    """Validation error response format."""

    error: str = "Bad Request"
    detail: list[dict]
