"""Domain exception classes for business logic errors."""


class DomainError(Exception):
    """Base class for all domain-specific errors."""

    pass


class ResourceNotFoundError(DomainError):
    """Raised when a requested resource cannot be found."""

    pass


class SubjectNotFoundError(ResourceNotFoundError):
    """Raised when a subject does not exist for the caller."""

    pass


class NoteFileNotFoundError(ResourceNotFoundError):
    """Raised when a file does not exist within a subject."""

    pass


class ValidationError(DomainError):
    """Raised when caller input fails validation."""

    pass


class NotesNotFoundError(ValidationError):
    """Raised when a generation request targets a subject with no notes."""

    pass


class ExtractionError(DomainError):
    """Raised when text cannot be extracted from an uploaded file."""

    pass


class UnsupportedFileTypeError(ExtractionError):
    """Raised when an uploaded file's extension is not on the allow-list."""

    pass


class UpstreamModelError(DomainError):
    """Raised when the language model call fails or times out."""

    pass


class RateLimitedError(UpstreamModelError):
    """Raised when the language model provider rejects a call for rate limiting."""

    pass


class ModelResponseParseError(UpstreamModelError):
    """Raised when the model's output cannot be parsed as a JSON object."""

    pass


class StorageError(DomainError):
    """Raised when the document store is unavailable."""

    pass
