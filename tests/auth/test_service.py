"""Tests for registration and login against an in-memory store."""

import pytest
from sqlalchemy import select

from bookshelf.auth.service import AuthService
from bookshelf.config import Settings
from bookshelf.database.connection import Database
from bookshelf.dbmodels import Users
from bookshelf.errors import (
    ConfigurationError,
    DuplicateUsername,
    InvalidCredentials,
    UserNotFound,
    ValidationError,
)


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_persists_hashed_password(self, auth_service, database):
        user = await auth_service.register("alice", "pw")

        async with database.session() as session:
            stored = (
                await session.execute(select(Users).where(Users.username == "alice"))
            ).scalar_one()

        assert stored.id == user.id
        assert stored.password != "pw"
        assert stored.password.startswith("$2")

    @pytest.mark.asyncio
    async def test_duplicate_username_is_rejected(self, auth_service):
        await auth_service.register("alice", "pw")

        with pytest.raises(DuplicateUsername):
            await auth_service.register("alice", "pw")

    @pytest.mark.asyncio
    async def test_duplicate_leaves_single_record(self, auth_service, database):
        await auth_service.register("alice", "pw")
        with pytest.raises(DuplicateUsername):
            await auth_service.register("alice", "other")

        async with database.session() as session:
            users = (await session.execute(select(Users))).scalars().all()

        assert len(users) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username,password", [("", "pw"), ("   ", "pw"), ("alice", "")])
    async def test_empty_fields_are_rejected(self, auth_service, username, password):
        with pytest.raises(ValidationError):
            await auth_service.register(username, password)

    @pytest.mark.asyncio
    async def test_overlong_username_is_rejected(self, auth_service):
        with pytest.raises(ValidationError, match="255"):
            await auth_service.register("u" * 256, "pw")

    @pytest.mark.asyncio
    async def test_overlong_password_is_rejected(self, auth_service):
        with pytest.raises(ValidationError, match="72 bytes"):
            await auth_service.register("alice", "x" * 73)


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_returns_token_for_user(self, auth_service):
        user = await auth_service.register("alice", "pw")

        result = await auth_service.login("alice", "pw")

        assert result.user.id == user.id
        assert auth_service.tokens.verify_token(result.token)["sub"] == str(user.id)

    @pytest.mark.asyncio
    async def test_wrong_password(self, auth_service):
        await auth_service.register("alice", "pw")

        with pytest.raises(InvalidCredentials):
            await auth_service.login("alice", "wrong")

    @pytest.mark.asyncio
    async def test_unknown_user(self, auth_service):
        with pytest.raises(UserNotFound):
            await auth_service.login("ghost", "x")


class TestFromSettings:
    @pytest.fixture
    def database(self):
        return Database("sqlite+aiosqlite:///:memory:")

    def test_missing_secret_is_a_configuration_error(self, database):
        settings = Settings(_env_file=None, session_secret=None)

        with pytest.raises(ConfigurationError, match="SESSION_SECRET"):
            AuthService.from_settings(settings, database)

    def test_settings_are_threaded_into_issuer(self, database):
        settings = Settings(
            _env_file=None,
            session_secret="s3cret-value",
            token_expiry_seconds=120,
            password_hash_rounds=6,
        )

        service = AuthService.from_settings(settings, database)

        assert service.tokens.secret_key == "s3cret-value"
        assert service.tokens.expires_in.total_seconds() == 120
        assert service.hash_rounds == 6
