"""Applies completed remote operations to the local collection."""

import logging
from typing import Iterable

from bookshelf.models import Book
from bookshelf.ordering import insertion_index
from bookshelf.state import BOOKS, CollectionState, EditSession

logger = logging.getLogger("bookshelf")


class Reconciler:
    """Chooses the smallest collection mutation that keeps the sort order."""

    def __init__(self, collection: CollectionState, session: EditSession):
        """
        Initialize the reconciler.

        Args:
            collection: Collection state to mutate
            session: Edit session closed after successful saves
        """
        self.collection = collection
        self.session = session

    def on_created(self, created: Book) -> list[str]:
        """
        Finish a successful create.

        The new book is not inserted locally; it shows up on the next fetch
        once server-generated fields have round-tripped.
        """
        logger.debug(f"Created book {created.id}: {created.name}")
        return self.session.close()

    def on_updated(self, book_id: int, updated: Book) -> list[str]:
        """
        Merge a successful update into the collection.

        Args:
            book_id: Id of the edited book
            updated: Book returned by the server

        Returns:
            Changed-field tags
        """
        changes = self._merge_update(book_id, updated)
        return changes + self.session.close()

    def _merge_update(self, book_id: int, updated: Book) -> list[str]:
        books = self.collection.books
        original = self.collection.find(book_id)
        if original is None:
            logger.warning(f"Updated book {book_id} is not in the collection")
            return []

        if original.name == updated.name:
            logger.debug(f"Book {book_id}: name unchanged, updating image in place")
            original.base64_image = updated.base64_image
            original.image_name = updated.image_name
        elif self.collection.sort_mode is None:
            logger.debug(f"Book {book_id}: renamed, unsorted, updating in place")
            original.name = updated.name
            original.base64_image = updated.base64_image
            original.image_name = updated.image_name
        else:
            if updated.id != book_id:
                logger.warning(f"Server returned id {updated.id} for book {book_id}")
                updated.id = book_id
            # Always remove then reinsert, even if the position would not change
            books.remove(original)
            index = insertion_index(books, updated, self.collection.sort_mode)
            books.insert(index, updated)
            logger.debug(f"Book {book_id}: renamed, reinserted at {index}")
        return self.collection.notify([BOOKS])

    def on_deleted(self, ids: Iterable[int]) -> int:
        """Drop deleted books from the collection; returns the count removed."""
        removed = self.collection.remove_ids(ids)
        logger.debug(f"Removed {removed} deleted books")
        return removed
