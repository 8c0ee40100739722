"""
Pydantic models for user data.

``UserRead`` is what the API returns for a user; the password hash
never leaves the service layer.  ``UserSummary`` is the populated form
of a ``created_by`` reference embedded in surveys and locations.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field


class UserSummary(BaseModel):
    """Creator reference expanded to the user's names."""

    id: int
    first_name: str = ""
    last_name: str = ""

    @computed_field
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    model_config = {
        "from_attributes": True,
    }


class UserCreate(BaseModel):
    """Schema for registering a user."""

    email: str = Field(..., min_length=3, examples=["user@example.com"])
    password: str = Field(..., min_length=1, examples=["strongpassword"])
    first_name: str = Field("", examples=["Ada"])
    last_name: str = Field("", examples=["Lovelace"])


class UserLogin(BaseModel):
    email: str
    password: str


class UserRead(UserSummary):
    """Schema for reading a user from the API."""

    email: str
    role: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
