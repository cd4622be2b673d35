"""Common constants used across the application."""

from typing import Callable, Dict, Type

from fastapi import HTTPException, status

from .exceptions import (
    DomainError,
    ExtractionError,
    RateLimitedError,
    ResourceNotFoundError,
    UpstreamModelError,
    ValidationError,
)

RATE_LIMITED_MESSAGE = "The AI is currently busy or at its usage limit. Please try again later or with a smaller document."

NO_NOTES_MESSAGE = "No notes found."

SUMMARY_FALLBACK = "No summary could be generated from these notes."

# Order matters: subclasses must precede their parents.
EXCEPTION_MAPPING: Dict[Type[DomainError], Callable[[str], HTTPException]] = {
    RateLimitedError: lambda message: HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=RATE_LIMITED_MESSAGE
    ),
    UpstreamModelError: lambda message: HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
    ),
    ResourceNotFoundError: lambda message: HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message),
    ValidationError: lambda message: HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message),
    ExtractionError: lambda message: HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message),
}
