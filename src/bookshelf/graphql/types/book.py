"""
Book GraphQL type definitions
"""

import strawberry


@strawberry.type
class Book:
    """Book type for GraphQL API."""

    id: strawberry.ID
    title: str
    author: str


@strawberry.input
class BookInput:
    """Exact-match filter on book fields; unset fields are not constrained."""

    title: str | None = None
    author: str | None = None
