"""Loading local cover images for upload."""

import base64
import logging
from pathlib import Path

from bookshelf.models import Book

logger = logging.getLogger("bookshelf")

IMAGE_EXTENSIONS = {".jpg", ".png"}


def load_image_as_encoded_string(path: str) -> str:
    """
    Read an image file and encode it for transport.

    Raises:
        OSError: If the file cannot be read
    """
    data = Path(path).read_bytes()
    return base64.b64encode(data).decode("ascii")


def attach_image(book: Book, path: str, loader=load_image_as_encoded_string) -> None:
    """
    Point book at a local image, loading its encoded contents.

    The book is left untouched if the file is rejected or cannot be read.

    Raises:
        ValueError: If the file is not a JPG or PNG image
        OSError: If the file cannot be read
    """
    source = Path(path)
    if source.suffix.lower() not in IMAGE_EXTENSIONS:
        raise ValueError(f"Unsupported image type: {source.name}")
    encoded = loader(path)
    book.image_path = path
    book.image_name = source.name
    book.base64_image = encoded
    logger.debug(f"Attached image {source.name} ({len(encoded)} chars)")
