"""Exceptions raised by the event and abort machinery."""


class InvalidStateError(Exception):
    """Raised when an object is used in a state that does not allow the operation."""

    def __init__(self, message: str = "Invalid State") -> None:
        super().__init__(message)
        self.message = message


class AbortError(Exception):
    """Raised when an operation was aborted."""

    def __init__(self, message: str = "Aborting...") -> None:
        super().__init__(message)
        self.message = message