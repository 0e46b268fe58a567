"""
User GraphQL type definitions
"""

import strawberry


@strawberry.type
class User:
    """User type for GraphQL API. The password hash is never exposed."""

    id: strawberry.ID
    username: str


@strawberry.type
class AuthPayload:
    """Result of a successful login."""

    token: str
    user: User
