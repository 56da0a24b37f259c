"""Custom exceptions for the :mod:`imagebank` package."""

from __future__ import annotations

from pathlib import Path


class ImageBankError(Exception):
    """Base exception for all imagebank errors."""


class ConfigurationError(ImageBankError):
    """Raised when pipeline settings are missing or inconsistent."""


class InvalidImage(ImageBankError):
    """Raised when a source image cannot be decoded."""

    def __init__(self, path: Path, reason: str = "") -> None:
        message = f"Invalid image: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class ImagePlacementError(ImageBankError):
    """Raised when a normalized image cannot be drawn onto a page."""

    def __init__(self, path: Path, reason: str = "") -> None:
        message = f"Unable to place image {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class DocumentWriteError(ImageBankError):
    """Raised when an intermediate document cannot be written or flushed."""

    def __init__(self, message: str, chunk_index: int | None = None) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index


class MergeError(ImageBankError):
    """Raised when the final document cannot be assembled or saved."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "ImageBankError",
    "ConfigurationError",
    "InvalidImage",
    "ImagePlacementError",
    "DocumentWriteError",
    "MergeError",
]
