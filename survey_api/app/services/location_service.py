"""
Business logic for locations.

Mirrors ``SurveyService``: one store operation per method, creator
populated on reads.  A location may be created anonymously, in which
case ``created_by`` stays ``NULL``.  Deleting a location that surveys
still reference violates the foreign key and surfaces as a
``ValidationError``.
"""

import logging
import sqlite3
from datetime import datetime
from typing import Callable, List, Optional

from ..core.db import Database, translate_errors
from ..core.errors import NotFoundError
from ..schemas.location import LocationCreate, LocationRead, LocationUpdate
from ..schemas.user import UserRead, UserSummary
from .survey_service import utcnow


logger = logging.getLogger(__name__)

LOCATION_SELECT = """
    SELECT l.id, l.name, l.description, l.address, l.created_by, l.created_on,
           u.first_name AS creator_first_name, u.last_name AS creator_last_name
    FROM locations AS l
    LEFT JOIN users AS u ON u.id = l.created_by
"""


class LocationService:
    """CRUD operations on the ``locations`` table."""

    def __init__(self, db: Database, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    async def create_location(self, data: LocationCreate, creator: Optional[UserRead]) -> LocationRead:
        created_on = self.clock()
        creator_id = creator.id if creator else None
        with translate_errors(), self.db.cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO locations (name, description, address, created_by, created_on)
                VALUES (?, ?, ?, ?, ?)
                """,
                (data.name, data.description, data.address, creator_id, created_on.isoformat()),
            )
            location_id = cursor.lastrowid
            row = cursor.execute(f"{LOCATION_SELECT} WHERE l.id = ?", (location_id,)).fetchone()
        logger.info("Created location %s (creator %s)", location_id, creator_id)
        return self._row_to_location(row)

    async def list_locations(self) -> List[LocationRead]:
        """Return all locations, newest first."""
        with translate_errors(), self.db.cursor() as cursor:
            rows = cursor.execute(
                f"{LOCATION_SELECT} ORDER BY l.created_on DESC, l.id DESC"
            ).fetchall()
        return [self._row_to_location(row) for row in rows]

    async def get_location(self, location_id: int) -> Optional[LocationRead]:
        with translate_errors(), self.db.cursor() as cursor:
            row = cursor.execute(f"{LOCATION_SELECT} WHERE l.id = ?", (location_id,)).fetchone()
        return self._row_to_location(row) if row else None

    async def update_location(self, location: LocationRead, data: LocationUpdate) -> LocationRead:
        with translate_errors(), self.db.cursor() as cursor:
            cursor.execute(
                "UPDATE locations SET name = ?, description = ?, address = ? WHERE id = ?",
                (data.name, data.description, data.address, location.id),
            )
            affected = cursor.rowcount
        if not affected:
            raise NotFoundError(f"Failed to load location {location.id}")
        logger.info("Updated location %s", location.id)
        return location.model_copy(
            update={"name": data.name, "description": data.description, "address": data.address}
        )

    async def delete_location(self, location: LocationRead) -> LocationRead:
        with translate_errors(), self.db.cursor() as cursor:
            cursor.execute("DELETE FROM locations WHERE id = ?", (location.id,))
            affected = cursor.rowcount
        if not affected:
            raise NotFoundError(f"Failed to load location {location.id}")
        logger.info("Deleted location %s", location.id)
        return location

    @staticmethod
    def _row_to_location(row: sqlite3.Row) -> LocationRead:
        creator = None
        if row["created_by"] is not None:
            creator = UserSummary(
                id=row["created_by"],
                first_name=row["creator_first_name"] or "",
                last_name=row["creator_last_name"] or "",
            )
        return LocationRead(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            address=row["address"],
            created_by=creator,
            created_on=row["created_on"],
        )
