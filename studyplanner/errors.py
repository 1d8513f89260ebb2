class ConstraintViolation(ValueError):
    """A write broke a data rule: bad enum value, missing field, duplicate or dangling reference."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageUnavailable(RuntimeError):
    """The underlying store could not be reached."""
