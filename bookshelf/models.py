from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class SortMode(Enum):
    """Active ordering of the collection by book name."""

    ASCENDING = 0
    DESCENDING = 1


@dataclass
class Book:
    """Represents a book record from the catalog service."""

    id: int = 0  # 0 means not yet persisted
    name: str = ""
    base64_image: Optional[str] = None
    image_name: Optional[str] = None
    image_path: Optional[str] = None  # local source, only while editing
    is_selected: bool = False  # client-only, never sent

    @property
    def is_draft(self) -> bool:
        """Return True if the book has not been saved remotely yet."""
        return self.id == 0

    @property
    def resolved_image_name(self) -> Optional[str]:
        """Image name, derived from the book name for persisted books."""
        if not self.is_draft and not (self.image_name or "").strip():
            return f"{self.name.replace(' ', '')}.img"
        return self.image_name

    def edit_copy(self) -> "Book":
        """Return a working copy suitable for an edit session."""
        return Book(
            id=self.id,
            name=self.name,
            base64_image=self.base64_image,
            image_name=self.image_name,
        )


@dataclass
class RemoteResult:
    """Outcome of a call to the remote catalog service."""

    ok: bool
    value: Any = None
    error_message: Optional[str] = None
    status_code: Optional[int] = None
    status_description: Optional[str] = None

    @property
    def message(self) -> str:
        """Human readable failure description."""
        if self.error_message:
            return self.error_message
        return f"Server Error:\n{self.status_description or ''}"
