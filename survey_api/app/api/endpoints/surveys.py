"""
Survey endpoints.

Collection routes (``/surveys``) list and create surveys; item routes
(``/surveys/{survey_id}``) read, update and delete the survey loaded
by the ``survey_by_id`` parameter dependency.  Listing is public,
creating requires a logged-in caller, and updating or deleting also
requires ``has_authorization`` (admin role).

``by_location_router`` exposes the surveys attached to a location and
is mounted under ``/locations``.
"""

from typing import List

from fastapi import APIRouter, Depends

from survey_api.app.core.config import Settings
from survey_api.app.core.db import Database, get_db
from survey_api.app.core.errors import AuthorizationError, NotFoundError
from survey_api.app.core.security import get_current_user, get_settings, is_admin
from survey_api.app.schemas.survey import (
    SurveyCreate,
    SurveyRead,
    SurveysByLocation,
    SurveysFound,
    SurveysNotFound,
    SurveyUpdate,
)
from survey_api.app.schemas.user import UserRead
from survey_api.app.services.survey_service import SurveyService


router = APIRouter()
by_location_router = APIRouter()


def get_survey_service(db: Database = Depends(get_db)) -> SurveyService:
    return SurveyService(db)


async def survey_by_id(
    survey_id: str,
    service: SurveyService = Depends(get_survey_service),
) -> SurveyRead:
    """Load the survey named in the path before the handler runs.

    Malformed and unknown identifiers both raise ``NotFoundError``.
    """
    try:
        key = int(survey_id)
    except ValueError:
        raise NotFoundError(f"Failed to load survey {survey_id}") from None
    survey = await service.get_survey(key)
    if survey is None:
        raise NotFoundError(f"Failed to load survey {survey_id}")
    return survey


async def has_authorization(
    current_user: UserRead = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> UserRead:
    """Allow only admins to modify surveys.

    Being the creator of the survey is deliberately not enough.
    """
    if not is_admin(current_user, settings):
        raise AuthorizationError()
    return current_user


@router.post("", response_model=SurveyRead)
async def create_survey(
    survey: SurveyCreate,
    current_user: UserRead = Depends(get_current_user),
    service: SurveyService = Depends(get_survey_service),
) -> SurveyRead:
    """Create a survey owned by the caller and stamped with the server time."""
    return await service.create_survey(survey, current_user)


@router.get("", response_model=List[SurveyRead])
async def list_surveys(
    service: SurveyService = Depends(get_survey_service),
) -> List[SurveyRead]:
    """Return all surveys, newest first, with the creator populated."""
    return await service.list_surveys()


@router.get("/{survey_id}", response_model=SurveyRead)
async def read_survey(survey: SurveyRead = Depends(survey_by_id)) -> SurveyRead:
    return survey


@router.put(
    "/{survey_id}",
    response_model=SurveyRead,
    dependencies=[Depends(has_authorization)],
)
async def update_survey(
    updates: SurveyUpdate,
    survey: SurveyRead = Depends(survey_by_id),
    service: SurveyService = Depends(get_survey_service),
) -> SurveyRead:
    """Replace the title and content of a survey (admin only)."""
    return await service.update_survey(survey, updates)


@router.delete(
    "/{survey_id}",
    response_model=SurveyRead,
    dependencies=[Depends(has_authorization)],
)
async def delete_survey(
    survey: SurveyRead = Depends(survey_by_id),
    service: SurveyService = Depends(get_survey_service),
) -> SurveyRead:
    """Delete a survey (admin only) and return what was removed."""
    return await service.delete_survey(survey)


@by_location_router.get("/{location_id}/surveys", response_model=SurveysByLocation)
async def list_surveys_by_location(
    location_id: str,
    service: SurveyService = Depends(get_survey_service),
):
    """List the surveys attached to a location.

    An empty result is reported in the body as ``state: "failure"``
    rather than as an error status.  A non-integer id cannot name a
    location and raises ``NotFoundError``.
    """
    try:
        key = int(location_id)
    except ValueError:
        raise NotFoundError(f"Failed to load location {location_id}") from None
    surveys = await service.list_by_location(key)
    if not surveys:
        return SurveysNotFound()
    return SurveysFound(surveys=surveys)
