"""Exception hierarchy for the Aptree API."""

from typing import Any


class AptreeError(Exception):
    """Base exception for all Aptree client errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NetworkError(AptreeError):
    """Raised when the fullnode rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class ResourceNotFoundError(NetworkError):
    """Raised when an account holds no resource of the requested type."""

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = 404,
        details: dict | None = None,
    ):
        super().__init__(message, endpoint=endpoint, status_code=status_code, details=details)
        self.resource_type = resource_type


class ValidationError(AptreeError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class ResultArityError(ValidationError):
    """Raised when a view function returns an unexpected number of values."""

    def __init__(self, function_id: str, expected: int, actual: int, result: Any = None):
        super().__init__(
            f"View {function_id} returned {actual} value(s), expected {expected}",
            field="result",
            value=result,
            details={"function": function_id, "expected": expected, "actual": actual},
        )
        self.function_id = function_id
        self.expected = expected
        self.actual = actual


class UnlockSequenceError(ValidationError):
    """Raised when an unlock completion is attempted out of order."""

    pass
