"""Command entry points used by the presentation layer."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from bookshelf.errors import (
    BookshelfError,
    ImageLoadError,
    RemoteError,
    SelectionPreconditionError,
    ValidationError,
)
from bookshelf.models import Book, SortMode
from bookshelf.reconciler import Reconciler
from bookshelf.services.images import attach_image, load_image_as_encoded_string
from bookshelf.state import BOOKS, EDIT_BOOK, SELECTION, CollectionState, EditSession

logger = logging.getLogger("bookshelf")

SAVED_MESSAGE = "The book was successfully saved."
MISSING_NAME_MESSAGE = "Please fill book name."
MISSING_IMAGE_MESSAGE = "Please select book image."
SELECT_ONE_MESSAGE = "Please select only one book."
NO_SELECTION_MESSAGE = "There are no selected books.\nPlease select at least one book to delete."
NO_EDIT_MESSAGE = "No book is open for editing."
DELETE_PROMPT_LIMIT = 10


@dataclass
class ActionResult:
    """Outcome of a user command."""

    ok: bool
    message: Optional[str] = None
    error: Optional[BookshelfError] = None
    cancelled: bool = False
    changes: list[str] = field(default_factory=list)

    @classmethod
    def success(cls, message: Optional[str] = None, changes: Optional[list[str]] = None) -> "ActionResult":
        return cls(ok=True, message=message, changes=changes or [])

    @classmethod
    def failure(cls, error: BookshelfError, changes: Optional[list[str]] = None) -> "ActionResult":
        return cls(ok=False, message=str(error), error=error, changes=changes or [])


def deletion_prompt(books: list[Book]) -> str:
    """Confirmation text listing the books about to be deleted."""
    names = "\n".join(f'"{book.name}"' for book in books[:DELETE_PROMPT_LIMIT])
    more = "\n..." if len(books) > DELETE_PROMPT_LIMIT else ""
    return f"Next books will be deleted ({len(books)}):\n\n{names}{more}\n\nContinue?"


class BookManager:
    """
    Turns user intents into remote calls and reconciles their outcomes.

    Each command issues at most one remote call and returns once the
    collection reflects its outcome.
    """

    def __init__(
        self,
        service,
        image_loader: Callable[[str], str] = load_image_as_encoded_string,
    ):
        """
        Initialize the manager.

        Args:
            service: Remote collaborator with fetch_all, create, update
                and delete_by_ids returning RemoteResult objects
            image_loader: Reads a local image as encoded text
        """
        self.service = service
        self.image_loader = image_loader
        self.collection = CollectionState()
        self.session = EditSession()
        self.reconciler = Reconciler(self.collection, self.session)

    def request_list(self) -> ActionResult:
        """Reload the whole collection from the service."""
        result = self.service.fetch_all()
        if not result.ok:
            logger.error(f"Failed to fetch books: {result.message}")
            changes = self.collection.set_connected(False)
            return ActionResult.failure(RemoteError(result.message), changes)

        changes = self.collection.load_all(result.value)
        changes += self.collection.set_connected(True)
        changes += self.session.close()
        logger.info(f"Fetched {len(self.collection.books)} books")
        return ActionResult.success(changes=changes)

    def set_sort(self, mode: Optional[SortMode]) -> ActionResult:
        return ActionResult.success(changes=self.collection.set_sort_mode(mode))

    def toggle_select(self, book_id: int, value: Optional[bool] = None) -> ActionResult:
        """Set the selection flag of a book, flipping it when value is None."""
        book = self.collection.find(book_id)
        if book is None:
            return ActionResult.success()
        if value is None:
            value = not book.is_selected
        return ActionResult.success(changes=self.collection.toggle_selection(book_id, value))

    def select_all(self) -> ActionResult:
        return ActionResult.success(changes=self.collection.select_all())

    def unselect_all(self) -> ActionResult:
        return ActionResult.success(changes=self.collection.unselect_all())

    def open_new_edit(self) -> ActionResult:
        return ActionResult.success(changes=self.session.open(Book()))

    def open_edit_existing(self) -> ActionResult:
        """Open a copy of the only selected book for editing."""
        selected = self.collection.selected()
        if len(selected) != 1:
            return ActionResult.failure(SelectionPreconditionError(SELECT_ONE_MESSAGE))
        return ActionResult.success(changes=self.session.open(selected[0].edit_copy()))

    def close_edit(self) -> ActionResult:
        return ActionResult.success(changes=self.session.close())

    def choose_image(self, path: str) -> ActionResult:
        """Attach a local image to the book being edited."""
        if not self.session.is_open:
            return ActionResult.failure(SelectionPreconditionError(NO_EDIT_MESSAGE))
        try:
            attach_image(self.session.book, path, loader=self.image_loader)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load image {path}: {e}")
            return ActionResult.failure(ImageLoadError(str(e)))
        return ActionResult.success(changes=self.session.notify([EDIT_BOOK]))

    def save(self) -> ActionResult:
        """Validate the open book and create or update it remotely."""
        if not self.session.is_open:
            return ActionResult.failure(SelectionPreconditionError(NO_EDIT_MESSAGE))

        book = self.session.book
        changes = self.session.set_error(None)

        if not book.name or not book.name.strip():
            return self._invalid(MISSING_NAME_MESSAGE, changes)

        if book.is_draft:
            if not book.image_path or not book.image_path.strip():
                return self._invalid(MISSING_IMAGE_MESSAGE, changes)
            return self._create(book, changes)

        original = self.collection.find(book.id)
        if original is not None and original.name == book.name and book.image_path is None:
            logger.debug(f"Book {book.id} unchanged, nothing to save")
            return ActionResult.success(changes=changes + self.session.close())
        return self._update(book, changes)

    def _invalid(self, message: str, changes: list[str]) -> ActionResult:
        changes += self.session.set_error(message)
        return ActionResult.failure(ValidationError(message), changes)

    def _remote_failure(self, action: str, message: str, changes: list[str]) -> ActionResult:
        logger.error(f"Failed to {action} book: {message}")
        changes += self.session.set_error(message)
        return ActionResult.failure(RemoteError(message), changes)

    def _create(self, book: Book, changes: list[str]) -> ActionResult:
        result = self.service.create(book)
        if not result.ok:
            return self._remote_failure("create", result.message, changes)
        created = result.value or book
        changes += self.reconciler.on_created(created)
        logger.info(f"Saved new book: {book.name}")
        return ActionResult.success(SAVED_MESSAGE, changes)

    def _update(self, book: Book, changes: list[str]) -> ActionResult:
        result = self.service.update(book)
        if not result.ok:
            return self._remote_failure("update", result.message, changes)
        updated = result.value or book.edit_copy()
        changes += self.reconciler.on_updated(book.id, updated)
        logger.info(f"Saved book {book.id}: {updated.name}")
        return ActionResult.success(SAVED_MESSAGE, changes)

    def delete_selected(self, confirm: Optional[Callable[[str], bool]] = None) -> ActionResult:
        """
        Delete every selected book.

        Args:
            confirm: Called with a prompt listing the books; deletion is
                abandoned when it returns False
        """
        selected = self.collection.selected()
        if not selected:
            return ActionResult.failure(SelectionPreconditionError(NO_SELECTION_MESSAGE))

        if confirm is not None and not confirm(deletion_prompt(selected)):
            logger.debug("Deletion cancelled")
            return ActionResult(ok=False, cancelled=True)

        ids = {book.id for book in selected}
        result = self.service.delete_by_ids(ids)
        if not result.ok:
            logger.error(f"Failed to delete books: {result.message}")
            return ActionResult.failure(RemoteError(result.message))

        removed = self.reconciler.on_deleted(ids)
        changes = [BOOKS, SELECTION] if removed else []
        logger.info(f"Deleted {removed} books")
        return ActionResult.success(f"Deleted {removed} books", changes)
