"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API runs out of the box against a local SQLite file.  Tests and
embedding applications may construct ``Settings`` explicitly and pass
it to ``create_app`` instead of relying on the environment.
"""

import os
from dataclasses import dataclass
from typing import Optional


# Access levels understood by ``core.security.require_access``.
ACCESS_PUBLIC = "public"
ACCESS_LOGIN = "login"
ACCESS_AUTHORIZED = "authorized"
ACCESS_LEVELS = (ACCESS_PUBLIC, ACCESS_LOGIN, ACCESS_AUTHORIZED)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Survey API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "survey_api.db")

    # Name of the role allowed past ``has_authorization`` gates.
    admin_role: str = os.getenv("ADMIN_ROLE", "admin")

    # Access level for the mutating location collection/item routes.
    # Each value must be one of ``ACCESS_LEVELS``.  The delete route is
    # always ``authorized``.
    location_create_access: str = os.getenv("LOCATION_CREATE_ACCESS", ACCESS_PUBLIC)
    location_update_access: str = os.getenv("LOCATION_UPDATE_ACCESS", ACCESS_PUBLIC)

    def __post_init__(self) -> None:
        for name in ("location_create_access", "location_update_access"):
            value = getattr(self, name).lower()
            if value not in ACCESS_LEVELS:
                raise ValueError(
                    f"{name} must be one of {', '.join(ACCESS_LEVELS)}, got {value!r}"
                )
            setattr(self, name, value)


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should therefore be set before importing this module.
settings = Settings()
