"""Token signing, password hashing and access-level wiring."""

import pytest

from survey_api.app.core.config import ACCESS_AUTHORIZED, ACCESS_LOGIN, ACCESS_PUBLIC, Settings
from survey_api.app.core.security import (
    access_dependencies,
    create_access_token,
    decode_access_token,
    get_current_user,
    hash_password,
    verify_password,
)


@pytest.fixture
def token_settings():
    return Settings(secret_key="k1")


def test_token_round_trip(token_settings):
    token = create_access_token({"sub": "a@example.com"}, token_settings)
    payload = decode_access_token(token, token_settings)
    assert payload["sub"] == "a@example.com"
    assert payload["exp"] > 0


def test_token_signed_with_other_secret_rejected(token_settings):
    token = create_access_token({"sub": "a@example.com"}, token_settings)
    assert decode_access_token(token, Settings(secret_key="k2")) is None


def test_expired_token_rejected(token_settings):
    token = create_access_token({"sub": "a@example.com"}, token_settings, expires_delta=-10)
    assert decode_access_token(token, token_settings) is None


@pytest.mark.parametrize("token", ["", "abc", "a.b.c", "a.b.c.d"])
def test_garbage_tokens_rejected(token, token_settings):
    assert decode_access_token(token, token_settings) is None


def test_password_hashing():
    hashed = hash_password("pw")
    assert hashed != hash_password("pw")
    assert verify_password("pw", hashed)
    assert not verify_password("other", hashed)
    assert not verify_password("pw", "not-a-hash")


def test_access_levels():
    def authorize():
        pass

    assert access_dependencies(ACCESS_PUBLIC) == []
    [login] = access_dependencies(ACCESS_LOGIN)
    assert login.dependency is get_current_user
    deps = access_dependencies(ACCESS_AUTHORIZED, authorize)
    assert [d.dependency for d in deps] == [get_current_user, authorize]


def test_authorized_level_needs_dependency():
    with pytest.raises(ValueError):
        access_dependencies(ACCESS_AUTHORIZED)
    with pytest.raises(ValueError):
        access_dependencies("everyone")


def test_settings_reject_unknown_access_level():
    with pytest.raises(ValueError):
        Settings(location_update_access="sometimes")
