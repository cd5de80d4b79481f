"""Catalog service client for book records."""

import logging
from typing import Any, Iterable, Optional

from bookshelf.client.api_client import ApiClient
from bookshelf.models import Book, RemoteResult

logger = logging.getLogger("bookshelf")


def book_to_payload(book: Book) -> dict[str, Any]:
    """Build the JSON body for a book; client-only fields are left out."""
    return {
        "id": book.id,
        "name": book.name,
        "base64Image": book.base64_image,
        "imageName": book.resolved_image_name,
    }


def book_from_payload(data: dict[str, Any]) -> Book:
    """Parse a book from a JSON object, matching keys case-insensitively."""
    fields = {key.lower(): value for key, value in data.items()}
    return Book(
        id=int(fields.get("id") or 0),
        name=fields.get("name") or "",
        base64_image=fields.get("base64image"),
        image_name=fields.get("imagename"),
    )


class BooksClient(ApiClient):
    """Reads and writes book records on a single REST resource."""

    DEFAULT_RESOURCE = "api/data"

    def __init__(
        self,
        server_url: str,
        resource: str = DEFAULT_RESOURCE,
        timeout: int = ApiClient.DEFAULT_TIMEOUT,
    ):
        """
        Initialize the books client.

        Args:
            server_url: Base URL of the catalog service
            resource: Resource path holding the book records
            timeout: Request timeout in seconds
        """
        super().__init__(server_url, timeout)
        self.endpoint = "/" + resource.strip("/")

    def fetch_all(self) -> RemoteResult:
        """
        Get every book.

        Returns:
            RemoteResult whose value is a list of Book objects
        """
        result = self._get(self.endpoint)
        if not result.ok:
            return result
        try:
            result.value = [book_from_payload(item) for item in result.value or []]
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Malformed book list: {e}")
            return RemoteResult(ok=False, error_message=f"Malformed book list: {e}")
        logger.debug(f"Fetched {len(result.value)} books")
        return result

    def create(self, book: Book) -> RemoteResult:
        """Create a book; the result value is the persisted Book."""
        return self._send_book("POST", book)

    def update(self, book: Book) -> RemoteResult:
        """Update a book; the result value is the Book returned by the server."""
        return self._send_book("PUT", book)

    def delete_by_ids(self, ids: Iterable[int]) -> RemoteResult:
        """Delete every book whose id is listed."""
        return self._delete(self.endpoint, data=sorted(ids))

    def _send_book(self, method: str, book: Book) -> RemoteResult:
        result = self._request(method, self.endpoint, book_to_payload(book))
        if not result.ok:
            return result
        returned: Optional[Book] = None
        if isinstance(result.value, dict):
            try:
                returned = book_from_payload(result.value)
            except (AttributeError, TypeError, ValueError) as e:
                logger.error(f"Malformed book in {method} response: {e}")
                return RemoteResult(ok=False, error_message=f"Malformed book: {e}")
        result.value = returned
        return result
