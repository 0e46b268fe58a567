"""
Root GraphQL query definitions
"""

import strawberry

from ..types.book import Book, BookInput

DEFAULT_LIMIT = 10


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def books(
        self,
        info: strawberry.Info,
        filter: BookInput | None = None,
        skip: int | None = 0,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[Book]:
        """List books matching an optional filter, paginated by skip/limit.

        Result order is not specified.
        """
        from ..resolvers.book import resolve_books

        return await resolve_books(
            info,
            filter,
            0 if skip is None else skip,
            DEFAULT_LIMIT if limit is None else limit,
        )

    @strawberry.field
    async def book(self, info: strawberry.Info, id: strawberry.ID) -> Book | None:
        """Get a book by ID."""
        from ..resolvers.book import resolve_book_by_id

        return await resolve_book_by_id(info, id)
