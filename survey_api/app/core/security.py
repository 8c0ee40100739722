"""
Security helpers: password hashing, signed access tokens and the
authentication/authorization dependencies used by the routers.

Tokens are a lightweight JSON Web Token implementation using
HMAC-SHA256 signatures and base64url encoding.  They embed arbitrary
claims plus an expiration timestamp (``exp``) and are signed with
``Settings.secret_key``.  Passwords are hashed with PBKDF2-HMAC-SHA256
and a per-password random salt.

Route access is expressed as one of three levels (see
``core.config.ACCESS_LEVELS``):

* ``public`` – anyone; the caller is still identified when a valid
  token is presented.
* ``login`` – a valid token is required (``get_current_user``).
* ``authorized`` – login plus a resource-specific authorization
  dependency (e.g. ``surveys.has_authorization``).
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import ACCESS_AUTHORIZED, ACCESS_LOGIN, ACCESS_PUBLIC, Settings
from .db import Database, get_db
from .errors import AuthenticationError
from ..schemas.user import UserRead


PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    data: Dict[str, Any], settings: Settings, expires_delta: Optional[int] = None
) -> str:
    """Create a signed token with the given claims.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "user@example.com"}``).
    settings : Settings
        Supplies the signing secret and the default lifetime.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """Verify a token and return its claims, or ``None`` if it is invalid or expired."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        # binascii.Error and json.JSONDecodeError are both ValueErrors
        return None
    if not isinstance(data, dict) or data.get("exp") is None:
        return None
    if int(data["exp"]) < int(time.time()):
        return None
    return data


def hash_password(password: str) -> str:
    """Hash a password as ``<salt hex>$<digest hex>``."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a value produced by ``hash_password``."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the application's ``Settings``."""
    return request.app.state.settings


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_settings),
    db: Database = Depends(get_db),
) -> Optional[UserRead]:
    """Identify the caller from the bearer token, if any.

    Missing, malformed or expired tokens and tokens whose subject no
    longer exists all yield ``None``.
    """
    if credentials is None:
        return None
    payload = decode_access_token(credentials.credentials, settings)
    if not payload or not payload.get("sub"):
        return None
    from ..services.user_service import UserService

    return await UserService(db).get_by_email(payload["sub"])


async def get_current_user(
    user: Optional[UserRead] = Depends(get_optional_user),
) -> UserRead:
    """Require a logged-in caller; raises ``AuthenticationError`` otherwise."""
    if user is None:
        raise AuthenticationError()
    return user


def is_admin(user: UserRead, settings: Settings) -> bool:
    return user.role == settings.admin_role


def access_dependencies(level: str, authorize: Optional[Callable[..., Any]] = None) -> List[Any]:
    """Return the route-level dependencies enforcing an access level.

    ``authorize`` is the resource's authorization dependency and is
    mandatory for the ``authorized`` level.
    """
    if level == ACCESS_PUBLIC:
        return []
    if level == ACCESS_LOGIN:
        return [Depends(get_current_user)]
    if level == ACCESS_AUTHORIZED:
        if authorize is None:
            raise ValueError("The 'authorized' access level needs an authorization dependency")
        return [Depends(get_current_user), Depends(authorize)]
    raise ValueError(f"Unknown access level {level!r}")
