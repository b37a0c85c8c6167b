# errors.py — error taxonomy shared by the client, form and controller
from typing import Any, Optional


class SymptomAppError(Exception):
    """Base error for the intake front end."""
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class ValidationError(SymptomAppError):
    """
    Local, recoverable input error. Shown next to the form; the user fixes
    the input and tries again.
    """
    pass


class TimestampError(ValidationError):
    """Wire timestamp outside the allowed range (negative seconds, nanoseconds >= 1e9)."""
    pass


class NetworkError(SymptomAppError):
    """
    Remote call failed: transport error, non-success status, or an unreadable body.
    """
    def __init__(self, message: str, operation: str, status_code: Optional[int] = None):
        super().__init__(message, field=operation, value=status_code)
        self.operation = operation
        self.status_code = status_code


class PayloadError(NetworkError):
    """Successful status but the body does not match the expected model."""
    pass


class UnhandledError(SymptomAppError):
    pass


class InvalidTransition(SymptomAppError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move from '{current}' to '{target}'", field="view", value=target)
        self.current = current
        self.target = target
