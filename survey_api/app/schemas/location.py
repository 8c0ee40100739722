"""
Pydantic models for locations.

Surveys reference a location through ``location_id``.  As with
surveys, the creator and the creation time are assigned server-side.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .user import UserSummary


class LocationBase(BaseModel):
    name: str = Field(..., examples=["Main office"])
    description: str = Field("", examples=["Ground floor reception"])
    address: Optional[str] = Field(None, examples=["1 Market Street"])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name cannot be blank")
        return value


class LocationCreate(LocationBase):
    """Schema for creating a location."""
    pass


class LocationUpdate(LocationBase):
    """Schema for updating a location.

    Name, description and address are replaced; the creator and the
    creation time never change.
    """
    pass


class LocationRead(LocationBase):
    """Schema for reading a location from the API."""

    id: int
    created_by: Optional[UserSummary] = None
    created_on: datetime

    model_config = {
        "from_attributes": True,
    }
