"""Custom exceptions for the face ledger service.

Errors split into two families: caller input problems, which are never worth
retrying, and transient infrastructure failures (extractor or storage), which
a caller may retry. ``retryable`` carries that distinction.
"""
from typing import Optional


class FaceRecognitionError(Exception):
    """Base exception for face recognition operations."""

    retryable: bool = False

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize face recognition error.

        Args:
            message: Error description
            details: Additional error context
        """
        super().__init__(message)
        self.details = details or {}


class ValidationError(FaceRecognitionError):
    """Raised when input is malformed, missing or has the wrong dimension."""
    pass


class NoFaceDetectedError(FaceRecognitionError):
    """Raised when no face is detected in the image."""
    pass


class AmbiguousInputError(FaceRecognitionError):
    """Raised when an enrollment image contains more than one face."""
    pass


class NotFoundError(FaceRecognitionError):
    """Raised when an enrolled identity does not exist."""
    pass


class ExtractionError(FaceRecognitionError):
    """Raised when the embedding extractor fails."""

    retryable = True


class InvalidImageError(ExtractionError):
    """Raised when the provided image is invalid or cannot be decoded."""
    pass


class ModelLoadError(ExtractionError):
    """Raised when the face recognition model fails to load."""
    pass


class StorageError(FaceRecognitionError):
    """Raised when the persistence layer fails."""

    retryable = True


class ServiceNotInitializedError(FaceRecognitionError):
    """Raised when a service is requested before the container is initialized."""
    pass
