"""
Route binder.

Aggregates the resource routers under their collection prefixes.
The location routes take their access levels from ``Settings`` and
are therefore built per application.
"""

from fastapi import APIRouter

from survey_api.app.core.config import Settings
from .endpoints import locations, surveys, users


def build_router(settings: Settings) -> APIRouter:
    router = APIRouter()
    router.include_router(locations.build_router(settings), prefix="/locations", tags=["locations"])
    # /locations/{location_id}/surveys
    router.include_router(surveys.by_location_router, prefix="/locations", tags=["surveys"])
    router.include_router(surveys.router, prefix="/surveys", tags=["surveys"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    return router
