"""Session token issuance and verification (self-issued JWTs)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import InvalidTokenError

from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_TOKEN_EXPIRY = timedelta(hours=1)


class AuthenticationError(Exception):
    """Raised when a session token cannot be verified."""

    pass


class SessionTokenIssuer:
    """Signs and verifies session tokens with a server-held secret."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "bookshelf",
        audience: str = "bookshelf-api",
        expires_in: timedelta = DEFAULT_TOKEN_EXPIRY,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.expires_in = expires_in

    def issue_token(self, user_id: str, claims: dict[str, Any] | None = None) -> str:
        """Issue a token for ``user_id`` that expires ``expires_in`` from now."""
        now = datetime.now(UTC)

        payload: dict[str, Any] = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "nbf": now,
            "exp": now + self.expires_in,
            "sub": str(user_id),
        }

        if claims:
            payload.update(claims)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> dict[str, Any]:
        """Verify signature, expiry and audience, and return the decoded claims.

        Raises:
            AuthenticationError: If the token is invalid, expired or lacks a subject
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "verify_exp": True,
                    "verify_nbf": True,
                    "verify_iat": True,
                    "require": ["exp", "sub"],
                },
            )
        except InvalidTokenError as e:
            logger.debug("JWT token validation failed", error=str(e))
            raise AuthenticationError(f"Invalid token: {e}") from e

        if not payload.get("sub"):
            raise AuthenticationError("Missing 'sub' claim in token")

        return payload
