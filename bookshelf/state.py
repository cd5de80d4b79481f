"""Observable client-side state: the book collection and the edit session."""

import logging
from typing import Callable, Iterable, Optional

from bookshelf.models import Book, SortMode
from bookshelf.ordering import sort_books

logger = logging.getLogger("bookshelf")

# Change tags passed to subscribers
BOOKS = "books"
CONNECTED = "connected"
SORT_MODE = "sort_mode"
SELECTION = "selection"
EDIT_BOOK = "edit_book"
EDIT_ERROR = "edit_error"

Listener = Callable[[list[str]], None]


class Observable:
    """Delivers lists of changed-field tags to subscribers."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, changes: list[str]) -> list[str]:
        if changes:
            for listener in list(self._listeners):
                listener(changes)
        return changes


class CollectionState(Observable):
    """
    Ordered books materialized on the client.

    While sort_mode is set the books are kept ordered by name under it.
    books is None until the first successful fetch.
    """

    def __init__(self):
        super().__init__()
        self.books: Optional[list[Book]] = None
        self.sort_mode: Optional[SortMode] = None
        self.connected: bool = False

    @property
    def loaded(self) -> bool:
        return self.books is not None

    @property
    def display_books(self) -> Optional[list[Book]]:
        """Books to show; None while the service is unreachable."""
        return self.books if self.connected else None

    def find(self, book_id: int) -> Optional[Book]:
        for book in self.books or []:
            if book.id == book_id:
                return book
        return None

    def selected(self) -> list[Book]:
        return [book for book in self.books or [] if book.is_selected]

    def load_all(self, books: Iterable[Book], keep_sort: bool = False) -> list[str]:
        """
        Replace the whole collection.

        A plain fetch resets the sort selection; with keep_sort the incoming
        books are ordered under the active mode instead.
        """
        books = list(books)
        changes = [BOOKS]
        if keep_sort and self.sort_mode is not None:
            books = sort_books(books, self.sort_mode)
        elif self.sort_mode is not None:
            self.sort_mode = None
            changes.append(SORT_MODE)
        self.books = books
        logger.debug(f"Loaded {len(books)} books")
        return self.notify(changes)

    def set_connected(self, value: bool) -> list[str]:
        if self.connected == value:
            return []
        self.connected = value
        return self.notify([CONNECTED])

    def set_sort_mode(self, mode: Optional[SortMode]) -> list[str]:
        """Re-sort the loaded collection under mode and record it."""
        if not self.loaded:
            return []
        changes = [SORT_MODE]
        if mode is not None:
            self.books = sort_books(self.books, mode)
            changes.insert(0, BOOKS)
        self.sort_mode = mode
        return self.notify(changes)

    def toggle_selection(self, book_id: int, value: bool) -> list[str]:
        book = self.find(book_id)
        if book is None:
            return []
        book.is_selected = value
        return self.notify([SELECTION])

    def select_all(self) -> list[str]:
        return self._set_all_selected(True)

    def unselect_all(self) -> list[str]:
        return self._set_all_selected(False)

    def _set_all_selected(self, value: bool) -> list[str]:
        if not self.books:
            return []
        for book in self.books:
            book.is_selected = value
        return self.notify([SELECTION])

    def remove_where_selected(self) -> int:
        """Remove every selected book; returns the number removed."""
        return self._remove(lambda book: book.is_selected)

    def remove_ids(self, ids: Iterable[int]) -> int:
        ids = set(ids)
        return self._remove(lambda book: book.id in ids)

    def _remove(self, condition: Callable[[Book], bool]) -> int:
        if not self.books:
            return 0
        kept = [book for book in self.books if not condition(book)]
        removed = len(self.books) - len(kept)
        if removed:
            self.books[:] = kept
            self.notify([BOOKS, SELECTION])
        return removed


class EditSession(Observable):
    """The single book currently open in the edit form, if any."""

    def __init__(self):
        super().__init__()
        self.book: Optional[Book] = None
        self.error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.book is not None

    def open(self, book: Book) -> list[str]:
        """Open book for editing, silently replacing any open session."""
        self.book = book
        self.error = None
        return self.notify([EDIT_BOOK, EDIT_ERROR])

    def close(self) -> list[str]:
        if self.book is None and self.error is None:
            return []
        self.book = None
        self.error = None
        return self.notify([EDIT_BOOK, EDIT_ERROR])

    def set_error(self, message: Optional[str]) -> list[str]:
        if self.error == message:
            return []
        self.error = message
        return self.notify([EDIT_ERROR])
