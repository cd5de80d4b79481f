"""Name based ordering of books."""

from functools import cmp_to_key
from typing import Optional, Sequence

from bookshelf.models import Book, SortMode


class BookComparator:
    """Three-way comparison of books by name, optionally descending."""

    def __init__(self, descending: bool = False):
        self.direction = -1 if descending else 1

    @classmethod
    def for_mode(cls, mode: SortMode) -> "BookComparator":
        return cls(descending=mode is SortMode.DESCENDING)

    def __call__(self, b1: Book, b2: Book) -> int:
        # Ordinal, case-sensitive
        if b1.name == b2.name:
            return 0
        return self.direction * (-1 if b1.name < b2.name else 1)


def sort_books(books: Sequence[Book], mode: SortMode) -> list[Book]:
    """Return a new list of books ordered for the given mode."""
    return sorted(books, key=cmp_to_key(BookComparator.for_mode(mode)))


def binary_search(
    books: Sequence[Book], item: Book, comparator: BookComparator
) -> int:
    """
    Search an ordered sequence for a book with an equal sort key.

    Returns:
        Index of a matching book, or the bitwise complement of the
        insertion point when none matches.
    """
    lo, hi = 0, len(books) - 1
    while lo <= hi:
        mid = (lo + hi) // 2
        order = comparator(books[mid], item)
        if order == 0:
            return mid
        if order < 0:
            lo = mid + 1
        else:
            hi = mid - 1
    return ~lo


def insertion_index(
    books: Sequence[Book], item: Book, mode: Optional[SortMode]
) -> int:
    """Position at which item keeps books ordered under mode."""
    if mode is None:
        return len(books)
    index = binary_search(books, item, BookComparator.for_mode(mode))
    if index < 0:
        index = ~index
    return index


def is_ordered(books: Sequence[Book], mode: SortMode) -> bool:
    """Check that books are totally ordered under mode."""
    comparator = BookComparator.for_mode(mode)
    return all(comparator(a, b) <= 0 for a, b in zip(books, books[1:]))
