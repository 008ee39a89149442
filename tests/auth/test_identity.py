"""Tests for footy_arena/auth/identity.py — username sign-in flow (mocked auth)."""

import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from footy_arena.auth.identity import (
    AVATAR_COLORS,
    IdentityService,
    validate_username,
)
from footy_arena.rooms.errors import (
    AuthenticationError,
    ConflictError,
    InvalidUsername,
    UsernameTaken,
)


def anon_user(user_id=None):
    return SimpleNamespace(id=user_id or str(uuid.uuid4()))


@pytest.fixture
def identity(fake_db) -> IdentityService:
    fake_db.auth.sign_in_anonymously.return_value = SimpleNamespace(
        user=anon_user(), session=MagicMock()
    )
    return IdentityService(fake_db)


class TestValidateUsername:
    @pytest.mark.parametrize("name", ["abc", "Kane_9", "a" * 16, "  trimmed_ "])
    def test_valid(self, name):
        assert validate_username(name) == name.strip()

    @pytest.mark.parametrize("name", ["", "ab", "a" * 17, "has space", "émile", "dash-ed", None])
    def test_invalid(self, name):
        with pytest.raises(InvalidUsername):
            validate_username(name)


class TestSignIn:
    def test_creates_profile(self, identity, fake_db):
        session = identity.sign_in("  Saka_7 ")

        assert session.username == "Saka_7"
        profile = fake_db.tables["profiles"][0]
        assert profile["id"] == session.user_id
        assert profile["username"] == "Saka_7"
        assert profile["avatar_color"] in AVATAR_COLORS

    def test_invalid_username_never_hits_auth(self, identity, fake_db):
        with pytest.raises(InvalidUsername):
            identity.sign_in("x")
        fake_db.auth.sign_in_anonymously.assert_not_called()

    def test_taken_username(self, identity, fake_db):
        fake_db.add_profile("Rashford")
        with pytest.raises(UsernameTaken) as exc:
            identity.sign_in("Rashford")

        assert isinstance(exc.value, ConflictError)
        fake_db.auth.sign_in_anonymously.assert_not_called()

    def test_duplicate_on_insert_signs_out(self, identity, fake_db):
        fake_db.fail_next("profiles", "insert", message="duplicate key", code="23505")

        with pytest.raises(UsernameTaken):
            identity.sign_in("Racer")
        fake_db.auth.sign_out.assert_called_once()

    def test_other_insert_failure_signs_out(self, identity, fake_db):
        fake_db.fail_next("profiles", "insert", message="permission denied", code="42501")

        with pytest.raises(AuthenticationError, match="permission denied"):
            identity.sign_in("Racer")
        fake_db.auth.sign_out.assert_called_once()

    def test_no_user_returned(self, identity, fake_db):
        fake_db.auth.sign_in_anonymously.return_value = SimpleNamespace(user=None, session=None)
        with pytest.raises(AuthenticationError):
            identity.sign_in("Racer")


class TestSessions:
    def test_current_session_none(self, identity, fake_db):
        fake_db.auth.get_session.return_value = None
        assert identity.get_current_session() is None
        assert identity.restore_session() is None

    def test_restore_session_loads_username(self, identity, fake_db):
        user_id = fake_db.add_profile("Bellingham")
        fake_db.auth.get_session.return_value = SimpleNamespace(user=anon_user(user_id))

        session = identity.restore_session()

        assert session.user_id == user_id
        assert session.username == "Bellingham"

    def test_restore_session_without_profile(self, identity, fake_db):
        fake_db.auth.get_session.return_value = SimpleNamespace(user=anon_user())
        assert identity.restore_session().username is None

    def test_on_session_change_passes_user_id(self, identity, fake_db):
        seen = []
        identity.on_session_change(seen.append)

        listener = fake_db.auth.on_auth_state_change.call_args.args[0]
        listener("SIGNED_IN", SimpleNamespace(user=anon_user("u-1")))
        listener("SIGNED_OUT", None)

        assert seen == ["u-1", None]

    def test_sign_out_delegates(self, identity, fake_db):
        identity.sign_out()
        fake_db.auth.sign_out.assert_called_once()
