"""
Exceptions raised by the storage layer.

Storage never speaks HTTP: services and the handlers in core.error_handlers
translate these into responses.
"""


class StorefrontError(Exception):
    """Base class for storefront errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConflictError(StorefrontError):
    """A write would violate a uniqueness rule (username, email, slug, cart line)."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class StorageError(StorefrontError):
    """Unexpected failure in the backing store."""


class InvalidDataError(StorefrontError):
    """A write would leave a record breaking its own rules, e.g. a sale price not below the price."""
