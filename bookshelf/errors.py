"""Error types reported to the presentation layer."""


class BookshelfError(Exception):
    """Base class for failures of a user action."""

    title = "Something Went Wrong"


class ValidationError(BookshelfError):
    """Edit form is incomplete; nothing was sent to the server."""

    title = "Invalid Book"


class RemoteError(BookshelfError):
    """The catalog service rejected or failed a request."""


class SelectionPreconditionError(BookshelfError):
    """Action invoked with the wrong number of selected books."""

    title = "Bad Action"


class ImageLoadError(BookshelfError):
    """A local image could not be attached to the edited book."""
