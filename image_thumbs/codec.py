"""
Codec - PNG/JPEG format detection, decoding and encoding with Pillow.
"""

import io
import posixpath
from enum import Enum

from PIL import Image, ImageOps

from .errors import ImageDecodeError, ImageEncodeError, UnsupportedFormatError


class ImageFormat(Enum):
    """Supported image formats as (Pillow format name, content type, lossy)."""

    PNG = ('PNG', 'image/png', False)
    JPEG = ('JPEG', 'image/jpeg', True)

    def __init__(self, pillow_name: str, content_type: str, lossy: bool):
        self.pillow_name = pillow_name
        self.content_type = content_type
        self.lossy = lossy

    @property
    def extension(self) -> str:
        """Preferred file extension."""
        return '.png' if self is ImageFormat.PNG else '.jpg'

    @classmethod
    def from_extension(cls, extension: str) -> 'ImageFormat':
        """Resolve a format from an extension such as '.JPG' (case-insensitive)."""
        ext_lower = extension.lower()
        if not ext_lower.startswith('.'):
            ext_lower = f".{ext_lower}"

        if ext_lower == '.png':
            return cls.PNG
        elif ext_lower in ('.jpg', '.jpeg'):
            return cls.JPEG
        raise UnsupportedFormatError(f"Image format not supported: {extension or '(none)'}")

    @classmethod
    def from_path(cls, path: str) -> 'ImageFormat':
        """Resolve a format from the extension of a storage path."""
        return cls.from_extension(posixpath.splitext(path)[1])


def is_supported(path: str) -> bool:
    """True if the path has a PNG or JPEG extension."""
    try:
        ImageFormat.from_path(path)
        return True
    except UnsupportedFormatError:
        return False


def decode(data: bytes, fmt: ImageFormat) -> Image.Image:
    """
    Decode image bytes into a fully loaded Pillow image.

    EXIF orientation is applied and uncommon color modes are normalized so
    every resize and encode path sees L, LA, RGB or RGBA (or CMYK for JPEG).

    Raises:
        ImageDecodeError: if the bytes are not a readable image of fmt
    """
    try:
        with Image.open(io.BytesIO(data), formats=[fmt.pillow_name]) as img:
            img.load()
            img = ImageOps.exif_transpose(img) or img
            return _normalize_mode(img, fmt)
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Cannot decode {fmt.pillow_name} image: {e}") from e


def encode(img: Image.Image, fmt: ImageFormat, quality: int) -> bytes:
    """
    Encode an image in the given format.

    quality only applies to JPEG. PNG output does not depend on it.

    Raises:
        ImageEncodeError: if Pillow fails to write the image
    """
    output = io.BytesIO()
    try:
        if fmt is ImageFormat.JPEG:
            img = _convert_for_jpeg(img)
            img.save(output, format='JPEG', quality=quality, optimize=True)
        else:
            img.save(output, format='PNG', optimize=True)
    except (OSError, ValueError) as e:
        raise ImageEncodeError(f"Cannot encode {fmt.pillow_name} image: {e}") from e
    return output.getvalue()


def _normalize_mode(img: Image.Image, fmt: ImageFormat) -> Image.Image:
    """Convert image to a color mode the resize and encode steps handle."""
    if img.mode in ('L', 'LA', 'RGB', 'RGBA'):
        return img
    if img.mode == 'CMYK' and fmt is ImageFormat.JPEG:
        return img
    if img.mode in ('P', 'PA') or 'transparency' in img.info:
        return img.convert('RGBA')
    return img.convert('RGB')


def _convert_for_jpeg(img: Image.Image) -> Image.Image:
    """Flatten alpha onto a white background, JPEG has no transparency."""
    if img.mode in ('RGBA', 'LA'):
        if img.mode == 'LA':
            img = img.convert('RGBA')
        background = Image.new('RGB', img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        return background
    elif img.mode not in ('RGB', 'L', 'CMYK'):
        return img.convert('RGB')
    return img
