"""
Variant pipeline - produces and stores one thumbnail variant.
"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from PIL import Image

from . import codec
from .codec import ImageFormat
from .errors import ThumbsError
from .generation_stats import GenerationResult
from .naming import join_key, render
from .resize import resize
from .storage import AsyncStorage
from .thumbnail_spec import ThumbnailSpec

RunCpu = Callable[..., Awaitable]


@dataclass(frozen=True)
class SourceImage:
    """
    Naming and format details of a source image.

    Attributes:
        stem: File name without directory and extension
        extension: Original extension including the dot, case preserved
        format: Image format derived from the extension
    """
    stem: str
    extension: str
    format: ImageFormat

    @classmethod
    def from_path(cls, path: str) -> 'SourceImage':
        stem, extension = posixpath.splitext(posixpath.basename(path))
        return cls(stem, extension, ImageFormat.from_extension(extension))

    @classmethod
    def from_name(cls, image_name: str, extension: str) -> 'SourceImage':
        if extension and not extension.startswith('.'):
            extension = f".{extension}"
        return cls(image_name, extension, ImageFormat.from_extension(extension))


def destination_key(spec: ThumbnailSpec, source: SourceImage, destination_prefix: str) -> str:
    """Storage key the variant for spec is written to."""
    name = render(spec.naming_pattern, source.stem, spec.name, source.extension)
    return join_key(destination_prefix, name)


def render_variant(image: Image.Image, spec: ThumbnailSpec, fmt: ImageFormat) -> bytes:
    """Resize and encode one variant. CPU bound, image is only read."""
    thumbnail = resize(image, spec.size, spec.mode)
    return codec.encode(thumbnail, fmt, spec.quality)


async def generate(
    storage: AsyncStorage,
    image: Image.Image,
    spec: ThumbnailSpec,
    source: SourceImage,
    destination_prefix: str,
    overwrite: bool,
    run_cpu: RunCpu,
    logger: Optional[logging.Logger] = None
) -> GenerationResult:
    """
    Generate one thumbnail variant.

    Without overwrite an existing destination is left untouched and the
    variant is SKIPPED. Otherwise the image is resized, encoded in the
    source format and written; only a completed write yields WRITTEN.
    Errors from the thumbnail taxonomy are returned as FAILED results.

    Args:
        storage: Async storage handle
        image: Decoded source image, shared and never mutated
        spec: Thumbnail spec to produce
        source: Source naming details
        destination_prefix: Prefix joined in front of the rendered name
        overwrite: Replace existing destination objects
        run_cpu: Coroutine function running a callable on the CPU pool
        logger: Optional logger instance
    """
    logger = logger or logging.getLogger(__name__)
    key = None
    try:
        key = destination_key(spec, source, destination_prefix)

        if not overwrite and await storage.exists(key):
            logger.debug(f"Skipping {key}: already exists")
            return GenerationResult.skipped(spec.name, key)

        data = await run_cpu(render_variant, image, spec, source.format)
        await storage.put(key, data, source.format.content_type)

    except ThumbsError as e:
        if e.spec_name is None:
            e.spec_name = spec.name
        logger.error(f"Error generating {key or spec.name}: {e}")
        return GenerationResult.failed(spec.name, key, e)

    logger.debug(f"Generated: {key} ({len(data)} bytes)")
    return GenerationResult.written(spec.name, key, len(data))
