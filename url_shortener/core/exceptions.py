"""Exception hierarchy for the URL shortener.

Three families live here:

AppError:
    Errors surfaced to API callers. Each carries the HTTP status code and
    the message returned in the response body.

StoreError:
    Raised by the durable store (alias conflicts, missing aliases,
    persistence faults).

CacheError:
    Raised by the cache layer. ``CacheMissError`` is the expected outcome
    of a lookup for an absent key and is a subclass so callers can tell a
    miss from a fault.
"""


class AppError(Exception):
    """Base class for errors translated into API responses."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Request input is missing or malformed."""

    status_code = 400


class NotFoundError(AppError):
    """Alias is unknown."""

    status_code = 404


class ConflictError(AppError):
    """Alias is already taken."""

    status_code = 409


class InternalError(AppError):
    """Store or infrastructure fault."""

    status_code = 500


class StoreError(Exception):
    """Generic base class for durable store errors."""

    pass


class AliasExistsError(StoreError):
    """Raised when inserting a mapping whose alias is already stored."""

    pass


class URLNotFoundError(StoreError):
    """Raised when no mapping exists for an alias."""

    pass


class StorageError(StoreError):
    """Raised on any other persistence fault (I/O, locking, corruption)."""

    pass


class CacheError(Exception):
    """Raised when the cache cannot serve a request."""

    pass


class CacheMissError(CacheError):
    """Raised when a requested key is not in the cache."""

    pass
