"""
Pytest fixtures for image_thumbs tests.
"""

import io

import pytest
import pytest_asyncio


def make_image_bytes(size=(200, 100), mode='RGB', fmt='PNG', color='red'):
    """Encode a solid test image with Pillow."""
    from PIL import Image

    img = Image.new(mode, size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_bytes():
    """Fixture providing the make_image_bytes factory."""
    return make_image_bytes


@pytest.fixture
def sample_png_bytes():
    """Fixture providing 200x100 PNG bytes with transparency."""
    return make_image_bytes(mode='RGBA', fmt='PNG', color=(255, 0, 0, 128))


@pytest.fixture
def sample_image_bytes():
    """Fixture providing 200x100 JPEG bytes."""
    return make_image_bytes(mode='RGB', fmt='JPEG', color='blue')


@pytest.fixture
def settings():
    """Fixture providing two thumbnail specs."""
    from image_thumbs.thumbnail_spec import Mode, ThumbnailSet, ThumbnailSpec

    return ThumbnailSet([
        ThumbnailSpec(name='standard', size=(64, 48), quality=80, mode=Mode.FIT),
        ThumbnailSpec(
            name='mini',
            size=(20, 20),
            quality=80,
            mode=Mode.CROP,
            naming_pattern='/{thumb_name}/{image_stem}',
        ),
    ])


@pytest.fixture
def memory_client():
    """Fixture providing an empty in-memory storage backend."""
    from image_thumbs.storage import MemoryClient
    return MemoryClient()


@pytest.fixture
def storage(memory_client):
    """Fixture providing an async handle over the in-memory backend."""
    from image_thumbs.storage import AsyncStorage

    handle = AsyncStorage(memory_client, max_workers=4)
    yield handle
    handle.close()


@pytest_asyncio.fixture
async def thumbs(storage, settings, logger):
    """Fixture providing an ImageThumbs context over in-memory storage."""
    from image_thumbs.thumbs import ImageThumbs

    context = ImageThumbs(storage, settings, cpu_workers=2, logger=logger)
    yield context
    await context.close()


@pytest.fixture
def config_file(tmp_path):
    """Fixture providing a YAML settings file."""
    filepath = tmp_path / "image_thumbs.yaml"
    filepath.write_text(
        "thumbs:\n"
        "  - name: standard\n"
        "    quality: 80\n"
        "    size: [640, 480]\n"
        "    mode: fit\n"
        "  - name: mini\n"
        "    naming_pattern: \"/{thumb_name}/{image_stem}\"\n"
        "    quality: 80\n"
        "    size: [40, 40]\n"
        "    mode: crop\n"
    )
    return str(filepath)


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')
