"""Errors raised by the store and repository layers.

Every subclass knows the HTTP status it maps to, so the app can turn any of
them into a ``{"message": ...}`` response with a single handler.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    """A product, cart or cart line item does not exist."""

    status_code = 404


class ValidationFailed(CatalogError):
    """Required fields are missing from a creation request."""

    status_code = 400


class StorageUnavailable(CatalogError):
    """A collection file exists but could not be read as a JSON list."""

    status_code = 500
