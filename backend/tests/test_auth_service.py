"""
PasteBin Backend - Auth Service Unit Tests
===========================================

What:  Tests for AuthService (password policy, credential store, login).
How:   Uses mock DB sessions; password hashing is real (passlib).

What we test:
    ✅ Password policy runs before any database access
    ✅ Duplicate email → ConflictError, including the unique-constraint race
    ✅ Unknown email and wrong password raise the identical error
    ✅ Successful signup/login return a verifiable token and no password hash
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from app.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ValidationError,
)
from app.models.user import User
from app.security import hash_password, verify_password
from app.services.auth_service import AuthService
from app.services.token_service import TokenIdentity, token_service


def _result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def _assign_id_on_flush(session, user_id=1):
    async def flush():
        user = session.add.call_args.args[0]
        user.id = user_id
    session.flush = AsyncMock(side_effect=flush)


class TestPasswordHashing:

    def test_hash_is_salted_and_verifies(self):
        first = hash_password("secret1")
        second = hash_password("secret1")
        assert first != second
        assert first.startswith("$pbkdf2-sha256$")
        assert verify_password("secret1", first)
        assert not verify_password("secret2", first)


class TestSignupPolicy:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [(None, "secret1"), ("a@x.com", None), ("", "secret1"), ("a@x.com", "")],
    )
    async def test_missing_fields(self, mock_db_session, email, password):
        with pytest.raises(ValidationError, match="Email and password required"):
            await self.service.signup(mock_db_session, email, password)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_short_password(self, mock_db_session):
        with pytest.raises(ValidationError, match="at least 6 characters"):
            await self.service.signup(mock_db_session, "a@x.com", "12345")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_confirmation_mismatch(self, mock_db_session):
        with pytest.raises(ValidationError, match="Passwords do not match"):
            await self.service.signup(mock_db_session, "a@x.com", "secret1", "secret2")
        mock_db_session.execute.assert_not_awaited()


class TestSignup:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    async def test_signup_success(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        _assign_id_on_flush(mock_db_session, user_id=9)

        response = await self.service.signup(mock_db_session, "a@x.com", "secret1", "secret1")

        assert response.user.id == 9
        assert response.user.email == "a@x.com"
        assert token_service.verify(response.token) == TokenIdentity(9, "a@x.com")
        assert "password" not in response.model_dump_json()

        stored = mock_db_session.add.call_args.args[0]
        assert isinstance(stored, User)
        assert stored.password_hash != "secret1"
        assert verify_password("secret1", stored.password_hash)

    @pytest.mark.asyncio
    async def test_existing_email_conflicts(self, mock_db_session):
        mock_db_session.execute.return_value = _result(3)

        with pytest.raises(ConflictError, match="User already exists"):
            await self.service.signup(mock_db_session, "a@x.com", "secret1")
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_constraint_race_conflicts(self, mock_db_session):
        """Both requests pass the pre-check; the database rejects the second INSERT."""
        mock_db_session.execute.return_value = _result(None)
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed"))
        )

        with pytest.raises(ConflictError):
            await self.service.create_user(mock_db_session, "a@x.com", "secret1")

    @pytest.mark.asyncio
    async def test_storage_failure_is_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.signup(mock_db_session, "a@x.com", "secret1")
        assert "connection refused" not in exc_info.value.message


class TestLogin:

    def setup_method(self):
        self.service = AuthService()

    def _user(self, password="secret1"):
        user = User(email="a@x.com", password_hash=hash_password(password))
        user.id = 4
        return user

    @pytest.mark.asyncio
    async def test_login_success(self, mock_db_session):
        mock_db_session.execute.return_value = _result(self._user())

        response = await self.service.login(mock_db_session, "a@x.com", "secret1")

        assert response.user.id == 4
        assert token_service.verify(response.token) == TokenIdentity(4, "a@x.com")

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_are_identical(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        with pytest.raises(AuthenticationError) as unknown:
            await self.service.login(mock_db_session, "nobody@x.com", "secret1")

        mock_db_session.execute.return_value = _result(self._user())
        with pytest.raises(AuthenticationError) as wrong:
            await self.service.login(mock_db_session, "a@x.com", "wrong-password")

        assert unknown.value.message == wrong.value.message == "Invalid credentials"
        assert type(unknown.value) is type(wrong.value)

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, mock_db_session):
        with pytest.raises(ValidationError, match="Email and password required"):
            await self.service.login(mock_db_session, "a@x.com", None)

    @pytest.mark.asyncio
    async def test_email_match_is_case_sensitive(self, mock_db_session):
        """The lookup uses the address exactly as given; no normalization happens."""
        mock_db_session.execute.return_value = _result(None)

        with pytest.raises(AuthenticationError):
            await self.service.login(mock_db_session, "A@X.COM", "secret1")

        statement = mock_db_session.execute.await_args.args[0]
        assert "A@X.COM" in statement.compile().params.values()
