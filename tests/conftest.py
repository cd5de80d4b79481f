"""Shared fixtures."""

import pytest

from bookshelf.manager import BookManager
from bookshelf.models import Book, RemoteResult


class FakeService:
    """In-memory stand-in for the catalog service."""

    def __init__(self, books=None):
        self.books = {book.id: book for book in books or []}
        self.calls = []
        self.fail_with = None
        self.next_id = max(self.books, default=0) + 1

    def _failure(self):
        return RemoteResult(ok=False, error_message=self.fail_with)

    def fetch_all(self):
        self.calls.append(("fetch_all",))
        if self.fail_with:
            return self._failure()
        return RemoteResult(ok=True, value=[b.edit_copy() for b in self.books.values()])

    def create(self, book):
        self.calls.append(("create", book.name))
        if self.fail_with:
            return self._failure()
        created = Book(id=self.next_id, name=book.name, base64_image=book.base64_image)
        self.next_id += 1
        self.books[created.id] = created
        return RemoteResult(ok=True, value=created.edit_copy())

    def update(self, book):
        self.calls.append(("update", book.id, book.name))
        if self.fail_with:
            return self._failure()
        stored = Book(id=book.id, name=book.name, base64_image=book.base64_image)
        self.books[book.id] = stored
        return RemoteResult(ok=True, value=stored.edit_copy())

    def delete_by_ids(self, ids):
        self.calls.append(("delete_by_ids", set(ids)))
        if self.fail_with:
            return self._failure()
        for book_id in ids:
            self.books.pop(book_id, None)
        return RemoteResult(ok=True)

    def mutating_calls(self):
        return [call for call in self.calls if call[0] != "fetch_all"]


def make_books(*names):
    return [Book(id=i, name=name, base64_image="aW1n") for i, name in enumerate(names, start=1)]


@pytest.fixture
def service():
    return FakeService(make_books("Carl", "Ann", "Eve"))


@pytest.fixture
def manager(service):
    manager = BookManager(service, image_loader=lambda path: "ZW5jb2RlZA==")
    manager.request_list()
    return manager
