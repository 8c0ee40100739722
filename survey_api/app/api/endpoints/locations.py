"""
Location endpoints.

The handlers are plain module-level coroutines; ``build_router``
binds them to paths together with the access level each route
requires.  Listing and reading are always public and deleting always
requires login plus ``has_authorization`` (admin or creator).  The
access levels of create and update come from
``Settings.location_create_access`` / ``Settings.location_update_access``
and default to ``public``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from survey_api.app.core.config import ACCESS_AUTHORIZED, ACCESS_PUBLIC, Settings
from survey_api.app.core.db import Database, get_db
from survey_api.app.core.errors import AuthorizationError, NotFoundError
from survey_api.app.core.security import (
    access_dependencies,
    get_current_user,
    get_optional_user,
    get_settings,
    is_admin,
)
from survey_api.app.schemas.location import LocationCreate, LocationRead, LocationUpdate
from survey_api.app.schemas.user import UserRead
from survey_api.app.services.location_service import LocationService


def get_location_service(db: Database = Depends(get_db)) -> LocationService:
    return LocationService(db)


async def location_by_id(
    location_id: str,
    service: LocationService = Depends(get_location_service),
) -> LocationRead:
    """Load the location named in the path before the handler runs."""
    try:
        key = int(location_id)
    except ValueError:
        raise NotFoundError(f"Failed to load location {location_id}") from None
    location = await service.get_location(key)
    if location is None:
        raise NotFoundError(f"Failed to load location {location_id}")
    return location


async def requires_admin(
    current_user: UserRead = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> UserRead:
    """Authorization for routes without a loaded location: admins only."""
    if not is_admin(current_user, settings):
        raise AuthorizationError()
    return current_user


async def has_authorization(
    location: LocationRead = Depends(location_by_id),
    current_user: UserRead = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> UserRead:
    """Allow admins and the creator of the location."""
    is_creator = location.created_by is not None and location.created_by.id == current_user.id
    if not (is_admin(current_user, settings) or is_creator):
        raise AuthorizationError()
    return current_user


async def create_location(
    location: LocationCreate,
    current_user: Optional[UserRead] = Depends(get_optional_user),
    service: LocationService = Depends(get_location_service),
) -> LocationRead:
    """Create a location; the caller, if identified, becomes its creator."""
    return await service.create_location(location, current_user)


async def list_locations(
    service: LocationService = Depends(get_location_service),
) -> List[LocationRead]:
    return await service.list_locations()


async def read_location(location: LocationRead = Depends(location_by_id)) -> LocationRead:
    return location


async def update_location(
    updates: LocationUpdate,
    location: LocationRead = Depends(location_by_id),
    service: LocationService = Depends(get_location_service),
) -> LocationRead:
    return await service.update_location(location, updates)


async def delete_location(
    location: LocationRead = Depends(location_by_id),
    service: LocationService = Depends(get_location_service),
) -> LocationRead:
    """Delete a location and return what was removed."""
    return await service.delete_location(location)


def build_router(settings: Settings) -> APIRouter:
    """Bind the location handlers to their paths and access levels."""
    router = APIRouter()

    router.add_api_route(
        "",
        list_locations,
        methods=["GET"],
        response_model=List[LocationRead],
        dependencies=access_dependencies(ACCESS_PUBLIC),
    )
    router.add_api_route(
        "",
        create_location,
        methods=["POST"],
        response_model=LocationRead,
        dependencies=access_dependencies(settings.location_create_access, requires_admin),
    )
    router.add_api_route(
        "/{location_id}",
        read_location,
        methods=["GET"],
        response_model=LocationRead,
        dependencies=access_dependencies(ACCESS_PUBLIC),
    )
    router.add_api_route(
        "/{location_id}",
        update_location,
        methods=["PUT"],
        response_model=LocationRead,
        dependencies=access_dependencies(settings.location_update_access, has_authorization),
    )
    router.add_api_route(
        "/{location_id}",
        delete_location,
        methods=["DELETE"],
        response_model=LocationRead,
        dependencies=access_dependencies(ACCESS_AUTHORIZED, has_authorization),
    )
    return router
