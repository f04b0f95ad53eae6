from __future__ import annotations

from persistence.errors import StorageError


class QuickMirrorError(Exception):
    """Base error for the project."""


class RequiredParameterMissing(QuickMirrorError):
    """Raised when a required argument is missing or empty."""

    def __init__(self, parameter: str) -> None:
        super().__init__(f"'{parameter}' parameter is required but is missing.")
        self.parameter = parameter


class InvalidType(QuickMirrorError):
    """Raised when an argument has the wrong type."""

    def __init__(self, parameter: str, expected_type: str, received_type: str) -> None:
        super().__init__(
            f"'{parameter}' must be a type of {expected_type}. Received type: {received_type}."
        )
        self.parameter = parameter
        self.expected_type = expected_type
        self.received_type = received_type


class InvalidTarget(QuickMirrorError):
    """Raised when the value stored at a key is not the type an operation needs."""

    def __init__(self, expected_type: str, received_type: str) -> None:
        super().__init__(
            f"The target in database must be a type of {expected_type}. "
            f"Received target type: {received_type}."
        )
        self.expected_type = expected_type
        self.received_type = received_type


class OneOrMoreTypesInvalid(QuickMirrorError):
    """Raised when some elements of a batch argument have the wrong type."""

    def __init__(self, parameter: str, expected_type: str, received_types: list[str]) -> None:
        super().__init__(
            f"'{parameter}' must only contain elements of type {expected_type}. "
            f"Received types: [{', '.join(received_types)}]."
        )
        self.parameter = parameter
        self.expected_type = expected_type
        self.received_types = list(received_types)


class IndexOutOfRange(QuickMirrorError):
    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Index {index} is out of range for an array of length {length}.")
        self.index = index
        self.length = length


class ConnectionNotEstablished(QuickMirrorError):
    def __init__(self) -> None:
        super().__init__("Connection to the database is not established.")


class InvalidConnectionURI(QuickMirrorError):
    def __init__(self, uri: str) -> None:
        super().__init__(f"Connection URI is invalid: {uri!r}.")
        self.uri = uri


__all__ = [
    "QuickMirrorError",
    "RequiredParameterMissing",
    "InvalidType",
    "InvalidTarget",
    "OneOrMoreTypesInvalid",
    "IndexOutOfRange",
    "ConnectionNotEstablished",
    "InvalidConnectionURI",
    "StorageError",
]
