from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy import select

from ...dbmodels import AUTHOR_MAX_LENGTH, TITLE_MAX_LENGTH, Books
from ...errors import ValidationError
from ...logging import get_logger
from ..context import get_database

if TYPE_CHECKING:
    from ..types.book import Book, BookInput

logger = get_logger(__name__)


def _parse_id(id: str) -> UUID | None:
    """Book IDs are UUIDs; anything else cannot match a stored book."""
    try:
        return UUID(str(id))
    except ValueError:
        return None


def _check_lengths(title: str | None, author: str | None) -> None:
    if title is not None and len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"title must be at most {TITLE_MAX_LENGTH} characters")
    if author is not None and len(author) > AUTHOR_MAX_LENGTH:
        raise ValidationError(f"author must be at most {AUTHOR_MAX_LENGTH} characters")


def _to_book(book: Books) -> Book:
    from ..types.book import Book as BookType

    return BookType(id=strawberry.ID(str(book.id)), title=book.title, author=book.author)


# Query resolvers
async def resolve_books(
    info: strawberry.Info,
    filter: BookInput | None,
    skip: int,
    limit: int,
) -> list[Book]:
    """
    Resolve books matching the filter's exact-match fields.

    Rows are ordered by primary key so consecutive skip/limit pages are
    disjoint; clients must not rely on any particular order.
    """
    if skip < 0:
        raise ValidationError("skip must not be negative")
    if limit < 0:
        raise ValidationError("limit must not be negative")

    stmt = select(Books)
    if filter is not None:
        if filter.title is not None:
            stmt = stmt.where(Books.title == filter.title)
        if filter.author is not None:
            stmt = stmt.where(Books.author == filter.author)
    stmt = stmt.order_by(Books.id).offset(skip).limit(limit)

    async with get_database(info).session() as session:
        result = await session.execute(stmt)
        books = result.scalars().all()

    return [_to_book(book) for book in books]


async def resolve_book_by_id(info: strawberry.Info, id: str) -> Book | None:
    book_id = _parse_id(id)
    if book_id is None:
        logger.info("Malformed book id", book_id=id)
        return None

    async with get_database(info).session() as session:
        book = await session.get(Books, book_id)

    if book is None:
        logger.info("Book not found", book_id=id)
        return None
    return _to_book(book)


# Mutation resolvers
async def add_book(info: strawberry.Info, title: str, author: str) -> Book:
    _check_lengths(title, author)
    book = Books(title=title, author=author)
    async with get_database(info).session() as session:
        session.add(book)
        await session.flush()

    logger.info("Book added", book_id=str(book.id))
    return _to_book(book)


async def update_book(
    info: strawberry.Info,
    id: str,
    title: str | None,
    author: str | None,
) -> Book | None:
    """Replace the given fields; fields passed as null or omitted are left unchanged."""
    _check_lengths(title, author)
    book_id = _parse_id(id)
    if book_id is None:
        return None

    async with get_database(info).session() as session:
        book = await session.get(Books, book_id)
        if book is None:
            logger.info("Book not found for update", book_id=id)
            return None

        if title is not None:
            book.title = title
        if author is not None:
            book.author = author
        await session.flush()
        updated = _to_book(book)

    logger.info("Book updated", book_id=id)
    return updated


async def delete_book(info: strawberry.Info, id: str) -> Book | None:
    """Delete a book, returning its pre-deletion snapshot."""
    book_id = _parse_id(id)
    if book_id is None:
        return None

    async with get_database(info).session() as session:
        book = await session.get(Books, book_id)
        if book is None:
            logger.info("Book not found for delete", book_id=id)
            return None

        snapshot = _to_book(book)
        await session.delete(book)

    logger.info("Book deleted", book_id=id)
    return snapshot
