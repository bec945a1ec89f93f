"""
Fit and crop resizing of decoded images.
"""

from typing import Tuple

from PIL import Image

from .errors import ImageProcessingError
from .thumbnail_spec import Mode

RESAMPLE = Image.Resampling.LANCZOS


def resize(image: Image.Image, target_size: Tuple[int, int], mode: Mode) -> Image.Image:
    """
    Resize an image into a target box.

    Mode.FIT scales by min(tw/sw, th/sh) so the whole image lies inside the
    box; one axis may end up smaller than the target. Mode.CROP scales by
    max(tw/sw, th/sh) so the image covers the box, then crops the centre to
    exactly target_size. Upscaling is allowed in both modes.

    Args:
        image: Decoded source image, left untouched
        target_size: (width, height) of the target box
        mode: Mode.FIT or Mode.CROP

    Returns:
        A new resized image
    """
    src_w, src_h = image.size
    target_w, target_h = target_size

    if src_w <= 0 or src_h <= 0:
        raise ImageProcessingError(f"Cannot resize image of size {src_w}x{src_h}")
    if target_w <= 0 or target_h <= 0:
        raise ImageProcessingError(f"Invalid target size {target_w}x{target_h}")

    if mode is Mode.FIT:
        return image.resize(fit_size(image.size, target_size), RESAMPLE)

    if mode is Mode.CROP:
        scaled_w, scaled_h = cover_size(image.size, target_size)
        scaled = image.resize((scaled_w, scaled_h), RESAMPLE)
        left = (scaled_w - target_w) // 2
        top = (scaled_h - target_h) // 2
        return scaled.crop((left, top, left + target_w, top + target_h))

    raise ImageProcessingError(f"Unknown resize mode {mode!r}")


def fit_size(source_size: Tuple[int, int], target_size: Tuple[int, int]) -> Tuple[int, int]:
    """Largest size with the source aspect ratio that fits in target_size."""
    src_w, src_h = source_size
    target_w, target_h = target_size
    scale = min(target_w / src_w, target_h / src_h)
    return (
        min(target_w, max(1, round(src_w * scale))),
        min(target_h, max(1, round(src_h * scale))),
    )


def cover_size(source_size: Tuple[int, int], target_size: Tuple[int, int]) -> Tuple[int, int]:
    """Smallest size with the source aspect ratio that covers target_size."""
    src_w, src_h = source_size
    target_w, target_h = target_size
    scale = max(target_w / src_w, target_h / src_h)
    return (
        max(target_w, round(src_w * scale)),
        max(target_h, round(src_h * scale)),
    )
