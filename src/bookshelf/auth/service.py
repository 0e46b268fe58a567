"""User registration and login."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ..config import Settings
from ..database.connection import Database
from ..dbmodels import USERNAME_MAX_LENGTH, Users
from ..errors import (
    ConfigurationError,
    DuplicateUsername,
    InvalidCredentials,
    UserNotFound,
    ValidationError,
)
from ..logging import get_logger
from .passwords import DEFAULT_ROUNDS, hash_password, verify_password
from .tokens import SessionTokenIssuer

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


@dataclass
class LoginResult:
    token: str
    user: Users


class AuthService:
    """Hashes passwords on registration, verifies them on login and issues session tokens."""

    def __init__(
        self,
        database: Database,
        tokens: SessionTokenIssuer,
        hash_rounds: int = DEFAULT_ROUNDS,
    ):
        self.database = database
        self.tokens = tokens
        self.hash_rounds = hash_rounds

    @classmethod
    def from_settings(cls, settings: Settings, database: Database) -> AuthService:
        if not settings.session_secret:
            raise ConfigurationError("SESSION_SECRET must be set to sign session tokens")

        tokens = SessionTokenIssuer(
            secret_key=settings.session_secret,
            algorithm=settings.jwt_algorithm,
            issuer=settings.token_issuer,
            audience=settings.token_audience,
            expires_in=timedelta(seconds=settings.token_expiry_seconds),
        )
        return cls(database, tokens, hash_rounds=settings.password_hash_rounds)

    async def register(self, username: str, password: str) -> Users:
        """Create a user with a bcrypt-hashed password.

        Raises:
            ValidationError: If username or password is empty or too long
            DuplicateUsername: If the store already holds this username
        """
        if not username or not username.strip():
            raise ValidationError("Username must not be empty")
        if len(username) > USERNAME_MAX_LENGTH:
            raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
        if not password:
            raise ValidationError("Password must not be empty")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        hashed = await hash_password(password, self.hash_rounds)
        user = Users(username=username, password=hashed)

        async with self.database.session() as session:
            session.add(user)
            try:
                await session.flush()
            except IntegrityError as e:
                logger.info("Registration rejected, username taken", username=username)
                raise DuplicateUsername() from e

        logger.info("User registered", user_id=str(user.id), username=username)
        return user

    async def login(self, username: str, password: str) -> LoginResult:
        """Verify credentials and issue a session token.

        Raises:
            UserNotFound: If no user has this username
            InvalidCredentials: If the password does not match the stored hash
        """
        async with self.database.session() as session:
            result = await session.execute(select(Users).where(Users.username == username))
            user = result.scalar_one_or_none()

        if user is None:
            logger.info("Login failed, unknown user", username=username)
            raise UserNotFound()

        if not await verify_password(password, user.password):
            logger.info("Login failed, bad password", user_id=str(user.id))
            raise InvalidCredentials()

        token = self.tokens.issue_token(str(user.id))
        logger.info("User logged in", user_id=str(user.id))
        return LoginResult(token=token, user=user)
