"""
Destination key naming for thumbnail variants.

A naming pattern may contain the tokens {image_stem} and {thumb_name}.
Other brace tokens are kept as they are. The source extension is always
appended to the rendered name.
"""

import re
from typing import Optional

from .errors import ConfigError

DEFAULT_PATTERN = '/{image_stem}_{thumb_name}'

_TOKEN_RE = re.compile(r'\{(image_stem|thumb_name)\}')
_SLASHES_RE = re.compile(r'/{2,}')


def render(
    pattern: Optional[str],
    image_stem: str,
    thumb_name: str,
    extension: str = ''
) -> str:
    """
    Render a destination name from a naming pattern.

    Args:
        pattern: Naming pattern, None or '' for DEFAULT_PATTERN
        image_stem: Source file name without directory and extension
        thumb_name: Thumbnail spec name
        extension: Source extension including the dot (e.g. '.png')

    Returns:
        Rendered name with a single leading '/', e.g. '/mini/penguin.png'
    """
    values = {'image_stem': image_stem, 'thumb_name': thumb_name}
    rendered = _TOKEN_RE.sub(lambda m: values[m.group(1)], pattern or DEFAULT_PATTERN)
    rendered = _SLASHES_RE.sub('/', rendered).strip('/')

    if not rendered:
        raise ConfigError(f"Naming pattern {pattern!r} renders to an empty name", thumb_name)

    return f"/{rendered}{extension}"


def join_key(prefix: Optional[str], name: str) -> str:
    """
    Join a destination prefix and a rendered name into a storage key.

    The result never starts with '/' and never contains '//'.
    """
    name = _SLASHES_RE.sub('/', name).strip('/')
    prefix = _SLASHES_RE.sub('/', prefix or '').strip('/')
    if not prefix:
        return name
    return f"{prefix}/{name}"
