"""
Tests for book GraphQL resolvers, executed through the schema
"""

import uuid

import pytest

ADD_BOOK = """
mutation AddBook($title: String!, $author: String!) {
  addBook(title: $title, author: $author) { id title author }
}
"""

GET_BOOK = "query GetBook($id: ID!) { book(id: $id) { id title author } }"

LIST_BOOKS = """
query ListBooks($filter: BookInput, $skip: Int, $limit: Int) {
  books(filter: $filter, skip: $skip, limit: $limit) { id title author }
}
"""

UPDATE_BOOK = """
mutation UpdateBook($id: ID!, $title: String, $author: String) {
  updateBook(id: $id, title: $title, author: $author) { id title author }
}
"""

DELETE_BOOK = "mutation DeleteBook($id: ID!) { deleteBook(id: $id) { id title author } }"


async def _add(execute, title, author):
    result = await execute(ADD_BOOK, {"title": title, "author": author})
    assert result.errors is None
    return result.data["addBook"]


class TestAddAndGetBook:
    @pytest.mark.asyncio
    async def test_added_book_can_be_fetched(self, execute):
        added = await _add(execute, "Dune", "Herbert")

        result = await execute(GET_BOOK, {"id": added["id"]})

        assert result.errors is None
        assert result.data["book"] == {"id": added["id"], "title": "Dune", "author": "Herbert"}

    @pytest.mark.asyncio
    async def test_each_book_gets_a_fresh_id(self, execute):
        ids = [(await _add(execute, f"T{i}", "A"))["id"] for i in range(5)]

        assert len(set(ids)) == 5

    @pytest.mark.asyncio
    async def test_missing_book_is_null(self, execute):
        result = await execute(GET_BOOK, {"id": str(uuid.uuid4())})

        assert result.errors is None
        assert result.data["book"] is None

    @pytest.mark.asyncio
    async def test_malformed_id_is_null(self, execute):
        result = await execute(GET_BOOK, {"id": "not-a-uuid"})

        assert result.errors is None
        assert result.data["book"] is None

    @pytest.mark.asyncio
    async def test_add_requires_both_fields(self, execute):
        result = await execute('mutation { addBook(title: "Only title") { id } }')

        assert result.errors is not None
        assert "author" in result.errors[0].message


class TestListBooks:
    @pytest.mark.asyncio
    async def test_filter_by_author(self, execute):
        for title, author in [("A", "X"), ("B", "Y"), ("C", "Z")]:
            await _add(execute, title, author)

        result = await execute(LIST_BOOKS, {"filter": {"author": "Y"}})

        assert result.errors is None
        assert [(b["title"], b["author"]) for b in result.data["books"]] == [("B", "Y")]

    @pytest.mark.asyncio
    async def test_filter_on_both_fields(self, execute):
        await _add(execute, "A", "X")
        await _add(execute, "A", "Y")

        result = await execute(LIST_BOOKS, {"filter": {"title": "A", "author": "X"}})

        assert [(b["title"], b["author"]) for b in result.data["books"]] == [("A", "X")]

    @pytest.mark.asyncio
    async def test_no_filter_returns_everything_up_to_default_limit(self, execute):
        for i in range(12):
            await _add(execute, f"T{i}", "A")

        result = await execute("{ books { id } }")

        assert len(result.data["books"]) == 10

    @pytest.mark.asyncio
    async def test_pages_are_disjoint_and_complete(self, execute):
        added = {(await _add(execute, f"T{i}", "A"))["id"] for i in range(4)}

        first = await execute(LIST_BOOKS, {"skip": 0, "limit": 2})
        second = await execute(LIST_BOOKS, {"skip": 2, "limit": 2})

        first_ids = {b["id"] for b in first.data["books"]}
        second_ids = {b["id"] for b in second.data["books"]}
        assert len(first_ids) == 2
        assert len(second_ids) == 2
        assert first_ids.isdisjoint(second_ids)
        assert first_ids | second_ids == added

    @pytest.mark.asyncio
    async def test_null_paging_arguments_use_defaults(self, execute):
        await _add(execute, "T", "A")

        result = await execute(LIST_BOOKS, {"skip": None, "limit": None})

        assert len(result.data["books"]) == 1

    @pytest.mark.asyncio
    async def test_negative_skip_is_a_validation_error(self, execute):
        result = await execute(LIST_BOOKS, {"skip": -1})

        assert result.errors[0].extensions["code"] == "VALIDATION_ERROR"


    @pytest.mark.asyncio
    async def test_overlong_title_is_a_validation_error(self, execute):
        result = await execute(ADD_BOOK, {"title": "x" * 513, "author": "A"})

        assert result.errors[0].extensions["code"] == "VALIDATION_ERROR"
        listed = await execute("{ books { id } }")
        assert listed.data["books"] == []


class TestUpdateBook:
    @pytest.mark.asyncio
    async def test_partial_update_preserves_other_fields(self, execute):
        added = await _add(execute, "Old", "Author")

        result = await execute(UPDATE_BOOK, {"id": added["id"], "title": "X"})

        assert result.errors is None
        assert result.data["updateBook"] == {"id": added["id"], "title": "X", "author": "Author"}
        fetched = await execute(GET_BOOK, {"id": added["id"]})
        assert fetched.data["book"]["author"] == "Author"

    @pytest.mark.asyncio
    async def test_update_both_fields(self, execute):
        added = await _add(execute, "Old", "Author")

        result = await execute(UPDATE_BOOK, {"id": added["id"], "title": "N", "author": "M"})

        assert result.data["updateBook"]["title"] == "N"
        assert result.data["updateBook"]["author"] == "M"

    @pytest.mark.asyncio
    async def test_update_missing_book_is_null(self, execute):
        result = await execute(UPDATE_BOOK, {"id": str(uuid.uuid4()), "title": "X"})

        assert result.errors is None
        assert result.data["updateBook"] is None


    @pytest.mark.asyncio
    async def test_overlong_author_on_update_is_rejected(self, execute):
        added = await _add(execute, "T", "A")

        result = await execute(UPDATE_BOOK, {"id": added["id"], "author": "y" * 513})

        assert result.errors[0].extensions["code"] == "VALIDATION_ERROR"
        fetched = await execute(GET_BOOK, {"id": added["id"]})
        assert fetched.data["book"]["author"] == "A"


class TestDeleteBook:
    @pytest.mark.asyncio
    async def test_delete_returns_snapshot_then_book_is_gone(self, execute):
        added = await _add(execute, "Doomed", "Author")

        deleted = await execute(DELETE_BOOK, {"id": added["id"]})
        fetched = await execute(GET_BOOK, {"id": added["id"]})

        assert deleted.data["deleteBook"] == added
        assert fetched.data["book"] is None

    @pytest.mark.asyncio
    async def test_delete_missing_book_is_null(self, execute):
        result = await execute(DELETE_BOOK, {"id": str(uuid.uuid4())})

        assert result.errors is None
        assert result.data["deleteBook"] is None
