"""
Business logic for users.

Users exist so that surveys and locations have a creator and so that
routes can be gated on login and role.  The first registered user is
given the admin role; every later registration gets the plain ``user``
role.
"""

import logging
import sqlite3
from typing import Optional

from ..core.config import Settings
from ..core.db import Database, translate_errors
from ..core.errors import ValidationError
from ..core.security import hash_password, verify_password
from ..schemas.user import UserCreate, UserRead


logger = logging.getLogger(__name__)

USER_COLUMNS = "id, email, first_name, last_name, role"


class UserService:
    """Register, look up and authenticate users."""

    def __init__(self, db: Database):
        self.db = db

    async def create_user(self, data: UserCreate, settings: Settings) -> UserRead:
        """Insert a user and return it without the password hash."""
        email = data.email.strip().lower()
        with translate_errors(), self.db.cursor() as cursor:
            if cursor.execute("SELECT 1 FROM users WHERE email = ?", (email,)).fetchone():
                raise ValidationError("Email already registered")
            row = cursor.execute("SELECT COUNT(*) AS count FROM users").fetchone()
            role = settings.admin_role if row["count"] == 0 else "user"
            cursor.execute(
                "INSERT INTO users (email, first_name, last_name, password, role) "
                "VALUES (?, ?, ?, ?, ?)",
                (email, data.first_name, data.last_name, hash_password(data.password), role),
            )
            user_id = cursor.lastrowid
        logger.info("Registered user %s (%s) with role %s", user_id, email, role)
        return UserRead(
            id=user_id,
            email=email,
            first_name=data.first_name,
            last_name=data.last_name,
            role=role,
        )

    async def get_by_email(self, email: str) -> Optional[UserRead]:
        with translate_errors(), self.db.cursor() as cursor:
            row = cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE email = ?",
                (email.strip().lower(),),
            ).fetchone()
        return self._row_to_user(row) if row else None

    async def authenticate(self, email: str, password: str) -> Optional[UserRead]:
        """Return the user when the credentials match, else ``None``."""
        with translate_errors(), self.db.cursor() as cursor:
            row = cursor.execute(
                f"SELECT {USER_COLUMNS}, password FROM users WHERE email = ?",
                (email.strip().lower(),),
            ).fetchone()
        if not row or not verify_password(password, row["password"]):
            logger.warning("Failed login for %s", email)
            return None
        return self._row_to_user(row)

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> UserRead:
        return UserRead(
            id=row["id"],
            email=row["email"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            role=row["role"],
        )
