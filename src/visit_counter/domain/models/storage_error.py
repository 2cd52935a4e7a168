"""Storage failure raised by visitor repositories."""


class StorageError(Exception):
    """A storage operation failed.

    Attributes:
        operation: Name of the repository operation that failed (e.g. ``"record_visit"``).
    """

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message
