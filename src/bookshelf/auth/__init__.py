"""Authentication for Bookshelf: password hashing, session tokens and the session middleware."""

from .context import AuthContext
from .middleware import SessionMiddleware, authenticate_header, get_auth_context
from .passwords import hash_password, verify_password
from .service import AuthService, LoginResult
from .tokens import AuthenticationError, SessionTokenIssuer

__all__ = [
    "AuthContext",
    "AuthService",
    "AuthenticationError",
    "LoginResult",
    "SessionMiddleware",
    "SessionTokenIssuer",
    "authenticate_header",
    "get_auth_context",
    "hash_password",
    "verify_password",
]
