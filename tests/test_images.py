"""Tests for local image loading."""

import base64

import pytest

from bookshelf.models import Book
from bookshelf.services.images import attach_image, load_image_as_encoded_string


def test_load_image_encodes_base64(tmp_path):
    image = tmp_path / "cover.png"
    image.write_bytes(b"\x89PNG data")
    assert base64.b64decode(load_image_as_encoded_string(str(image))) == b"\x89PNG data"


def test_load_missing_image_raises(tmp_path):
    with pytest.raises(OSError):
        load_image_as_encoded_string(str(tmp_path / "missing.png"))


def test_attach_image_sets_fields(tmp_path):
    image = tmp_path / "Cover.JPG"
    image.write_bytes(b"jpeg")
    book = Book(name="Dune")

    attach_image(book, str(image))

    assert book.image_path == str(image)
    assert book.image_name == "Cover.JPG"
    assert book.base64_image == base64.b64encode(b"jpeg").decode("ascii")


def test_attach_unreadable_image_leaves_book(tmp_path):
    book = Book(id=1, name="Dune", base64_image="b2xk")
    with pytest.raises(OSError):
        attach_image(book, str(tmp_path / "gone.png"))
    assert book.base64_image == "b2xk"
    assert book.image_path is None


def test_attach_rejects_unsupported_extension(tmp_path):
    with pytest.raises(ValueError):
        attach_image(Book(), str(tmp_path / "cover.gif"))


def test_resolved_image_name_for_persisted_book():
    assert Book(id=2, name="War and Peace").resolved_image_name == "WarandPeace.img"
    assert Book(id=0, name="Draft").resolved_image_name is None
    assert Book(id=2, name="X", image_name="x.png").resolved_image_name == "x.png"
