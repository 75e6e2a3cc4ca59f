"""
Users module data models.

User is the stored record and carries the password hash. It must never be
returned from a route: routes respond with UserResponse, which has no
password field at all.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class User(BaseModel):
    """A user record as held by the user store."""

    id: int = Field(default=0, description="Primary key (0 until inserted)")
    first_name: str = Field(..., description="Given name")
    last_name: str = Field(..., description="Family name")
    email: EmailStr = Field(..., description="Login identifier, unique")
    password: Optional[str] = Field(
        None, description="bcrypt hash, None if the user cannot log in", repr=False
    )
    last_login: Optional[datetime] = Field(None, description="Last successful login")
    created_at: Optional[datetime] = Field(None, description="Row creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class UserResponse(BaseModel):
    """Public user representation returned by the API and stored in web sessions."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: EmailStr
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(BaseModel):
    """PATCH body. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    id: Optional[int] = Field(None, description="Must match the path id if given")
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: Optional[str] = Field(None, min_length=1, description="New plaintext password")


class UserCreate(BaseModel):
    """PUT body. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    id: Optional[int] = Field(None, description="Must match the path id if given")
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: Optional[str] = Field(None, min_length=1, description="Plaintext password")
