"""
Errors raised by the link store.

Routes translate these into HTTP responses; nothing here knows about HTTP.
"""


class LinkStoreError(Exception):
    """Base class for link store errors"""


class InvalidURLError(LinkStoreError):
    """The long URL is empty or missing"""


class LinkNotFoundError(LinkStoreError):
    """No link exists for the requested short code"""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' not found")


class StorageError(LinkStoreError):
    """The database failed for a reason other than a short code collision"""


class ShortCodeExhaustedError(StorageError):
    """Every attempt to find an unused short code collided"""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Could not generate unique short code after {attempts} attempts"
        )
