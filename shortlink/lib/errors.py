"""Error taxonomy for the link shortener.

Every error carries the HTTP status it maps to so adapters can render it
without a lookup table.
"""


class ShortLinkError(Exception):
    """Base class for all link shortener errors."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class ValidationError(ShortLinkError):
    """Malformed or missing input."""

    status_code = 400


class NotFoundError(ShortLinkError):
    """Short code does not resolve to a link."""

    status_code = 404


class MethodNotAllowedError(ShortLinkError):
    """HTTP verb is not supported."""

    status_code = 405


class ConflictError(ShortLinkError):
    """Custom code is already taken."""

    status_code = 409


class StorageError(ShortLinkError):
    """Backend I/O failure."""

    status_code = 500


class CollisionExhaustedError(ShortLinkError):
    """Random code generation kept colliding with existing links."""

    status_code = 500
