"""Session middleware: attach the bearer token's identity to each request."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..logging import get_logger, set_user_context
from .context import AuthContext
from .tokens import AuthenticationError, SessionTokenIssuer

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def authenticate_header(authorization: str | None, tokens: SessionTokenIssuer) -> AuthContext:
    """
    Build the AuthContext for an ``Authorization`` header value.

    Fail-open: a missing, malformed, expired or forged token yields an
    unauthenticated context rather than an error.
    """
    if not authorization:
        return AuthContext()

    if not authorization.startswith(BEARER_PREFIX):
        logger.warning("Invalid authorization format received")
        return AuthContext()

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        logger.warning("Empty token provided")
        return AuthContext()

    try:
        claims = tokens.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Session token rejected, continuing unauthenticated", error=str(e))
        return AuthContext()

    return AuthContext(user_id=claims["sub"], token=token, claims=claims)


class SessionMiddleware(BaseHTTPMiddleware):
    """Verify ``Authorization: Bearer <token>`` and store the result on ``request.state.auth``."""

    def __init__(self, app: ASGIApp, tokens: SessionTokenIssuer):
        super().__init__(app)
        self.tokens = tokens

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        auth = authenticate_header(request.headers.get("authorization"), self.tokens)
        request.state.auth = auth

        if auth.is_authenticated:
            set_user_context(auth.user_id)
            logger.debug("Session token verified", user_id=auth.user_id)

        return await call_next(request)


def get_auth_context(request: Request) -> AuthContext:
    """Read the AuthContext the middleware attached, or an anonymous one."""
    return getattr(request.state, "auth", None) or AuthContext()
