from typing import Any, ClassVar


class ServiceError(Exception):
    """Base exception for errors rendered as a JSON error response."""

    status_code: ClassVar[int] = 500
    summary: ClassVar[str] = "Internal Server Error"

    def __init__(self, details: Any = None, summary: str | None = None) -> None:
        self.error = summary or self.summary
        self.details = details if details is not None else {}
        super().__init__(f"{self.error}: {self.details}")

    def to_body(self) -> dict[str, Any]:
        return {"error": self.error, "details": self.details}


class ValidationError(ServiceError):
    """Raised when a request body is missing fields or malformed."""

    status_code = 400
    summary = "Missing required fields"


class MethodNotAllowedError(ServiceError):
    """Raised for any verb other than POST on the uploads endpoint."""

    status_code = 405
    summary = "Method Not Allowed"


class PersistenceError(ServiceError):
    """Raised when a database read or write fails."""

    def __init__(self, message: str) -> None:
        super().__init__(details=message)


class UnknownError(ServiceError):
    """Catch-all for unexpected failures while handling a request."""

    def __init__(self, message: str) -> None:
        super().__init__(details=message)
