"""
Business logic for surveys.

Every method performs a single record-store operation.  Reads
"populate" the ``created_by`` reference by joining against ``users``
so responses carry the creator's names instead of a bare id.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..core.db import Database, translate_errors
from ..core.errors import NotFoundError
from ..schemas.survey import SurveyCreate, SurveyRead, SurveyUpdate
from ..schemas.user import UserRead, UserSummary


logger = logging.getLogger(__name__)

SURVEY_SELECT = """
    SELECT s.id, s.title, s.content, s.location_id, s.created_by, s.created_on,
           u.first_name AS creator_first_name, u.last_name AS creator_last_name
    FROM surveys AS s
    LEFT JOIN users AS u ON u.id = s.created_by
"""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SurveyService:
    """CRUD operations on the ``surveys`` table."""

    def __init__(self, db: Database, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    async def create_survey(self, data: SurveyCreate, creator: UserRead) -> SurveyRead:
        """Insert a survey owned by ``creator`` and stamped with the current time."""
        created_on = self.clock()
        with translate_errors(), self.db.cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO surveys (title, content, location_id, created_by, created_on)
                VALUES (?, ?, ?, ?, ?)
                """,
                (data.title, data.content, data.location_id, creator.id, created_on.isoformat()),
            )
            survey_id = cursor.lastrowid
            row = cursor.execute(f"{SURVEY_SELECT} WHERE s.id = ?", (survey_id,)).fetchone()
        logger.info("User %s created survey %s", creator.id, survey_id)
        return self._row_to_survey(row)

    async def list_surveys(self) -> List[SurveyRead]:
        """Return all surveys, newest first."""
        with translate_errors(), self.db.cursor() as cursor:
            rows = cursor.execute(
                f"{SURVEY_SELECT} ORDER BY s.created_on DESC, s.id DESC"
            ).fetchall()
        return [self._row_to_survey(row) for row in rows]

    async def list_by_location(self, location_id: int) -> List[SurveyRead]:
        with translate_errors(), self.db.cursor() as cursor:
            rows = cursor.execute(
                f"{SURVEY_SELECT} WHERE s.location_id = ? ORDER BY s.created_on DESC, s.id DESC",
                (location_id,),
            ).fetchall()
        return [self._row_to_survey(row) for row in rows]

    async def get_survey(self, survey_id: int) -> Optional[SurveyRead]:
        with translate_errors(), self.db.cursor() as cursor:
            row = cursor.execute(f"{SURVEY_SELECT} WHERE s.id = ?", (survey_id,)).fetchone()
        return self._row_to_survey(row) if row else None

    async def update_survey(self, survey: SurveyRead, data: SurveyUpdate) -> SurveyRead:
        """Replace the title and content of a loaded survey.

        No other column is touched.  Raises ``NotFoundError`` if the
        survey disappeared after it was loaded.
        """
        with translate_errors(), self.db.cursor() as cursor:
            cursor.execute(
                "UPDATE surveys SET title = ?, content = ? WHERE id = ?",
                (data.title, data.content, survey.id),
            )
            affected = cursor.rowcount
        if not affected:
            raise NotFoundError(f"Failed to load survey {survey.id}")
        logger.info("Updated survey %s", survey.id)
        return survey.model_copy(update={"title": data.title, "content": data.content})

    async def delete_survey(self, survey: SurveyRead) -> SurveyRead:
        """Remove a loaded survey and return its last-known representation."""
        with translate_errors(), self.db.cursor() as cursor:
            cursor.execute("DELETE FROM surveys WHERE id = ?", (survey.id,))
            affected = cursor.rowcount
        if not affected:
            raise NotFoundError(f"Failed to load survey {survey.id}")
        logger.info("Deleted survey %s", survey.id)
        return survey

    @staticmethod
    def _row_to_survey(row: sqlite3.Row) -> SurveyRead:
        creator = None
        if row["created_by"] is not None:
            creator = UserSummary(
                id=row["created_by"],
                first_name=row["creator_first_name"] or "",
                last_name=row["creator_last_name"] or "",
            )
        return SurveyRead(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            location_id=row["location_id"],
            created_by=creator,
            created_on=row["created_on"],
        )
