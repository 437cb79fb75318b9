class UploaderError(Exception):
    """Base exception for all client-side upload errors."""


class ValidationError(UploaderError):
    """Raised when a file selection cannot be uploaded as given."""


class SubmissionError(UploaderError):
    """Raised when the resolution service rejects or never answers a submission."""
