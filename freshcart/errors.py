"""
Error types and message constants.

Only ValidationError ever reaches the caller. PersistenceError is raised by
storage adapters and recovered inside the catalog and cart services.
"""

# Draft validation
ERROR_NAME_REQUIRED = "Please enter a product name"
ERROR_INVALID_PRICE = "Please enter a valid price"
ERROR_NEGATIVE_PRICE = "Price cannot be negative"
ERROR_UNKNOWN_CATEGORY = "Unknown category"

# Storage
ERROR_STORE_UNAVAILABLE = "Durable store unavailable"
ERROR_STORE_NOT_CONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"
ERROR_CORRUPTED_SNAPSHOT = "Stored snapshot could not be decoded"


class ShopError(Exception):
    """Base class for FreshCart errors."""


class ValidationError(ShopError):
    """A product draft failed validation.

    ``field`` names the offending draft field so the caller can point the
    user at it.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class PersistenceError(ShopError):
    """The durable store could not be read or written."""

    def __init__(self, message: str = ERROR_STORE_UNAVAILABLE, key: str | None = None):
        super().__init__(message if key is None else f"{message} (key={key})")
        self.key = key


__all__ = [
    "ShopError",
    "ValidationError",
    "PersistenceError",
    "ERROR_NAME_REQUIRED",
    "ERROR_INVALID_PRICE",
    "ERROR_NEGATIVE_PRICE",
    "ERROR_UNKNOWN_CATEGORY",
    "ERROR_STORE_UNAVAILABLE",
    "ERROR_STORE_NOT_CONFIGURED",
    "ERROR_CORRUPTED_SNAPSHOT",
]
