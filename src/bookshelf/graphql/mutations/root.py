"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.book import Book
from ..types.user import AuthPayload, User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Book mutations
    @strawberry.mutation(name="addBook")
    async def add_book(self, info: strawberry.Info, title: str, author: str) -> Book:
        """Create a new book."""
        from ..resolvers.book import add_book

        return await add_book(info, title, author)

    @strawberry.mutation(name="updateBook")
    async def update_book(
        self,
        info: strawberry.Info,
        id: strawberry.ID,
        title: str | None = None,
        author: str | None = None,
    ) -> Book | None:
        """Replace the supplied fields of a book; omitted fields keep their value."""
        from ..resolvers.book import update_book

        return await update_book(info, id, title, author)

    @strawberry.mutation(name="deleteBook")
    async def delete_book(self, info: strawberry.Info, id: strawberry.ID) -> Book | None:
        """Delete a book and return it as it was before deletion."""
        from ..resolvers.book import delete_book

        return await delete_book(info, id)

    # Auth mutations
    @strawberry.mutation
    async def register(self, info: strawberry.Info, username: str, password: str) -> User:
        """Register a new user."""
        from ..resolvers.auth import register

        return await register(info, username, password)

    @strawberry.mutation
    async def login(self, info: strawberry.Info, username: str, password: str) -> AuthPayload:
        """Exchange credentials for a session token."""
        from ..resolvers.auth import login

        return await login(info, username, password)
