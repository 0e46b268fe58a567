"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AuthContext:
    """Runtime authentication context for a request."""

    user_id: str | None = None
    token: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        """Check if the request carried a valid session token."""
        return self.user_id is not None
