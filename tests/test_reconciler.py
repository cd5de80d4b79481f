"""Tests for applying remote outcomes to the collection."""

import random

from bookshelf.models import Book, SortMode
from bookshelf.ordering import is_ordered
from bookshelf.reconciler import Reconciler
from bookshelf.state import BOOKS, CollectionState, EditSession
from tests.conftest import make_books


def setup(names, mode=None):
    collection = CollectionState()
    collection.load_all(make_books(*names))
    if mode is not None:
        collection.set_sort_mode(mode)
    session = EditSession()
    return collection, session, Reconciler(collection, session)


def names(collection):
    return [book.name for book in collection.books]


def by_name(collection, name):
    return next(book for book in collection.books if book.name == name)


def test_rename_under_ascending_repositions():
    collection, session, reconciler = setup(["Ann", "Carl", "Eve"], SortMode.ASCENDING)
    carl = by_name(collection, "Carl")

    reconciler.on_updated(carl.id, Book(id=carl.id, name="Zed"))

    assert names(collection) == ["Ann", "Eve", "Zed"]


def test_rename_under_descending_keeps_position():
    collection, session, reconciler = setup(["Zed", "Eve", "Ann"], SortMode.DESCENDING)
    eve = by_name(collection, "Eve")

    reconciler.on_updated(eve.id, Book(id=eve.id, name="Ben"))

    assert names(collection) == ["Zed", "Ben", "Ann"]


def test_rename_under_sort_inserts_server_book():
    collection, session, reconciler = setup(["Ann", "Carl"], SortMode.ASCENDING)
    carl = by_name(collection, "Carl")
    carl.is_selected = True
    returned = Book(id=carl.id, name="Bob", base64_image="bmV3")

    reconciler.on_updated(carl.id, returned)

    assert collection.books[1] is returned
    assert not returned.is_selected


def test_rename_without_sort_updates_in_place():
    collection, session, reconciler = setup(["Carl", "Ann", "Eve"])
    carl = by_name(collection, "Carl")

    reconciler.on_updated(carl.id, Book(id=carl.id, name="Zed", base64_image="bmV3"))

    assert names(collection) == ["Zed", "Ann", "Eve"]
    assert collection.books[0] is carl
    assert carl.base64_image == "bmV3"


def test_same_name_updates_image_in_place():
    collection, session, reconciler = setup(["Ann", "Carl"], SortMode.ASCENDING)
    carl = by_name(collection, "Carl")
    carl.is_selected = True

    changes = reconciler.on_updated(carl.id, Book(id=carl.id, name="Carl", base64_image="bmV3"))

    assert BOOKS in changes
    assert collection.books[1] is carl
    assert carl.base64_image == "bmV3"
    assert carl.is_selected


def test_update_closes_session():
    collection, session, reconciler = setup(["Ann"])
    session.open(Book(id=1, name="Anna"))
    reconciler.on_updated(1, Book(id=1, name="Anna"))
    assert not session.is_open


def test_reinserted_book_keeps_original_id():
    collection, session, reconciler = setup(["Ann", "Carl", "Eve"], SortMode.ASCENDING)
    carl = by_name(collection, "Carl")

    reconciler.on_updated(carl.id, Book(name="Zed"))

    assert names(collection) == ["Ann", "Eve", "Zed"]
    assert collection.books[2].id == carl.id
    assert sorted(book.id for book in collection.books) == [1, 2, 3]


def test_update_of_unknown_book_leaves_collection():
    collection, session, reconciler = setup(["Ann", "Bob"], SortMode.ASCENDING)
    reconciler.on_updated(42, Book(id=42, name="Aaron"))
    assert names(collection) == ["Ann", "Bob"]


def test_created_book_is_not_inserted():
    collection, session, reconciler = setup(["Ann"])
    session.open(Book(name="Bob"))

    reconciler.on_created(Book(id=7, name="Bob"))

    assert names(collection) == ["Ann"]
    assert not session.is_open


def test_deleted_ids_are_removed():
    collection, session, reconciler = setup(["Ann", "Bob", "Carl"])
    assert reconciler.on_deleted({1, 3}) == 2
    assert names(collection) == ["Bob"]


def test_random_renames_keep_collection_ordered():
    """Any sequence of renames leaves the collection sorted."""
    rng = random.Random(1234)
    letters = "ABCDEFGabcdefg"
    for mode in SortMode:
        initial = ["".join(rng.choice(letters) for _ in range(3)) for _ in range(12)]
        collection, session, reconciler = setup(initial, mode)
        for _ in range(200):
            target = rng.choice(collection.books)
            new_name = "".join(rng.choice(letters) for _ in range(rng.randint(1, 4)))
            reconciler.on_updated(target.id, Book(id=target.id, name=new_name))
            assert is_ordered(collection.books, mode)
        assert len(collection.books) == 12
