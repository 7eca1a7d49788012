"""
Custom exception hierarchy for the letterbox remover.

Every fatal condition of a run is one of these types, so the CLI can report
a single contextual message and exit non-zero.
"""
from pathlib import Path


class LetterboxRemoverError(Exception):
    """Base exception for all letterbox remover errors."""
    pass


class InvalidThresholdError(LetterboxRemoverError, ValueError):
    """Raised when a detection threshold is outside 0-255."""
    pass


class InputNotFoundError(LetterboxRemoverError):
    """Raised when the input path does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Input path does not exist: {path}")


class DirectoryReadError(LetterboxRemoverError):
    """Raised when a directory cannot be listed during traversal."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        super().__init__(f"Failed to read directory: {path}: {cause}")


class ImageProcessingError(LetterboxRemoverError):
    """Raised when an image cannot be decoded, cropped or re-encoded."""
    pass


class FileProcessingError(LetterboxRemoverError):
    """Raised when processing a single file fails. Wraps the underlying error."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        super().__init__(f"Failed to process image file: {path}: {cause}")
