"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents the caller behind a valid access token.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection. It is never read
    back from the database.
    """

    id: int = Field(..., description="User ID (token subject)")
    name: str = Field(default="", description="Full name embedded at issuance")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }
