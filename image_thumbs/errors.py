"""
Exception types raised by image_thumbs.
"""

from typing import Optional


class ThumbsError(Exception):
    """
    Base class for all thumbnail errors.

    Attributes:
        spec_name: Name of the thumbnail spec the error belongs to, if any
    """

    def __init__(self, message: str, spec_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.spec_name = spec_name

    def __str__(self) -> str:
        if self.spec_name:
            return f"thumbnail '{self.spec_name}': {self.message}"
        return self.message


class ConfigError(ThumbsError):
    """Malformed or missing settings, duplicate names, empty naming pattern."""


class UnsupportedFormatError(ThumbsError):
    """File extension is neither PNG nor JPEG."""


class ImageDecodeError(ThumbsError):
    """Source bytes could not be decoded."""


class ImageProcessingError(ThumbsError):
    """Resize geometry is degenerate."""


class ImageEncodeError(ThumbsError):
    """Resized image could not be encoded."""


class StorageError(ThumbsError):
    """Storage backend failed (connectivity, permission, missing object)."""
