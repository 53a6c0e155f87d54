"""Storage resolution specific exceptions."""


class ResolutionError(Exception):
    """Base exception for storage metadata resolution failures."""

    def __init__(self, message: str, *args):
        self.message = message
        super().__init__(message, *args)


class NotFoundError(ResolutionError):
    """Exception raised when a claim or a storage class must exist but does not."""


class TypeMismatchError(ResolutionError):
    """Exception raised when a cached object is not of the expected type."""

    def __init__(self, message: str, *args, expected: type, actual: type):
        self.expected = expected.__name__
        self.actual = actual.__name__
        super().__init__(message, *args)


class MissingReferenceError(ResolutionError):
    """Exception raised when a volume does not refer to any claim."""


class StoreLookupError(ResolutionError):
    """Exception raised when the underlying store fails to retrieve a key."""

    def __init__(self, message: str, *args, key: str):
        self.key = key
        super().__init__(message, *args)
