"""
Pydantic models for surveys.

Only ``title``, ``content`` and ``location_id`` are accepted from
clients.  ``created_by`` and ``created_on`` are assigned by the
service; any such keys in a request body are ignored because the
request models do not declare them.
"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .user import UserSummary


class SurveyCreate(BaseModel):
    """Schema for creating a survey."""

    title: str = Field(..., examples=["Customer satisfaction"])
    content: str = Field("", examples=["How did we do?"])
    location_id: Optional[int] = Field(None, examples=[1])

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title cannot be blank")
        return value


class SurveyUpdate(BaseModel):
    """Schema for updating a survey.

    Only the title and content of a survey may change.  Both are
    replaced wholesale, so an omitted ``content`` clears it.
    """

    title: str
    content: str = ""

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title cannot be blank")
        return value


class SurveyRead(BaseModel):
    """Schema for reading a survey from the API."""

    id: int
    title: str
    content: str
    location_id: Optional[int] = None
    created_by: Optional[UserSummary] = None
    created_on: datetime

    model_config = {
        "from_attributes": True,
    }


class SurveysFound(BaseModel):
    """Surveys attached to a location, newest first."""

    state: Literal["success"] = "success"
    surveys: List[SurveyRead]


class SurveysNotFound(BaseModel):
    """No survey is attached to the location."""

    state: Literal["failure"] = "failure"
    surveys: None = None
    message: str = "No survey found"


# Tagged on ``state``; only the failure shape carries a ``message``.
SurveysByLocation = Annotated[Union[SurveysFound, SurveysNotFound], Field(discriminator="state")]
