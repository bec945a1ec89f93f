"""
image_thumbs - Thumbnail variants for images in object storage.

For every source image a configured set of thumbnails is produced:
    1. The original is read and decoded once
    2. Each thumbnail spec is resized (fit or crop), encoded in the
       original format and written concurrently

Supports S3-compatible stores (AWS, MinIO, Google Cloud Storage),
the local filesystem and an in-memory store.
"""

__version__ = "0.2.0"

from .errors import (
    ThumbsError,
    ConfigError,
    UnsupportedFormatError,
    ImageDecodeError,
    ImageProcessingError,
    ImageEncodeError,
    StorageError,
)
from .thumbnail_spec import Mode, ThumbnailSpec, ThumbnailSet
from .config import load_settings
from .naming import DEFAULT_PATTERN, render, join_key
from .resize import resize
from .codec import ImageFormat
from .generation_stats import Status, GenerationResult, GenerationStats
from .storage import StorageClient, AsyncStorage, MemoryClient
from .s3_config import S3Config
from .s3_client import S3Client
from .local_client import LocalConfig, LocalClient
from .pipeline import SourceImage
from .thumbs import ImageThumbs

__all__ = [
    "ThumbsError",
    "ConfigError",
    "UnsupportedFormatError",
    "ImageDecodeError",
    "ImageProcessingError",
    "ImageEncodeError",
    "StorageError",
    "Mode",
    "ThumbnailSpec",
    "ThumbnailSet",
    "load_settings",
    "DEFAULT_PATTERN",
    "render",
    "join_key",
    "resize",
    "ImageFormat",
    "Status",
    "GenerationResult",
    "GenerationStats",
    "StorageClient",
    "AsyncStorage",
    "MemoryClient",
    "S3Config",
    "S3Client",
    "LocalConfig",
    "LocalClient",
    "SourceImage",
    "ImageThumbs",
]
