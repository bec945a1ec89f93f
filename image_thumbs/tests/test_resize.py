"""Tests for fit and crop resizing."""

import pytest
from PIL import Image

from image_thumbs.errors import ImageProcessingError
from image_thumbs.resize import cover_size, fit_size, resize
from image_thumbs.thumbnail_spec import Mode


SOURCE_SIZES = [(200, 100), (100, 200), (640, 480), (33, 77), (10, 10), (3, 40)]
TARGETS = [(50, 50), (64, 48), (120, 20), (300, 240)]


class TestFit:
    """Tests for Mode.FIT."""

    @pytest.mark.parametrize('source_size', SOURCE_SIZES)
    @pytest.mark.parametrize('target', TARGETS)
    def test_fits_in_box_keeping_aspect(self, source_size, target):
        """Test the result lies within the box with the source aspect ratio."""
        img = Image.new('RGB', source_size, color='blue')

        result = resize(img, target, Mode.FIT)

        assert result.width <= target[0]
        assert result.height <= target[1]
        # one axis touches the box
        assert result.width == target[0] or result.height == target[1]
        src_ratio = source_size[0] / source_size[1]
        assert result.width == pytest.approx(result.height * src_ratio, abs=src_ratio + 1)

    def test_landscape(self):
        """Test a 2:1 image in a square box."""
        img = Image.new('RGB', (200, 100))

        assert resize(img, (50, 50), Mode.FIT).size == (50, 25)

    def test_upscales(self):
        """Test small sources are scaled up."""
        img = Image.new('RGB', (20, 10))

        assert resize(img, (100, 100), Mode.FIT).size == (100, 50)

    def test_fit_size(self):
        """Test fit geometry."""
        assert fit_size((640, 480), (64, 64)) == (64, 48)
        assert fit_size((1, 500), (50, 50)) == (1, 50)


class TestCrop:
    """Tests for Mode.CROP."""

    @pytest.mark.parametrize('source_size', SOURCE_SIZES)
    @pytest.mark.parametrize('target', TARGETS)
    def test_exact_target_size(self, source_size, target):
        """Test the result is exactly the target size."""
        img = Image.new('RGB', source_size, color='green')

        assert resize(img, target, Mode.CROP).size == target

    def test_crops_centre(self):
        """Test the crop is centred."""
        img = Image.new('RGB', (300, 100), color=(255, 0, 0))
        img.paste((0, 0, 255), (100, 0, 200, 100))

        result = resize(img, (100, 100), Mode.CROP)

        assert result.getpixel((50, 50)) == (0, 0, 255)
        assert result.getpixel((2, 50))[2] > 200
        assert result.getpixel((97, 50))[2] > 200

    def test_cover_size(self):
        """Test cover geometry."""
        assert cover_size((200, 100), (50, 50)) == (100, 50)
        assert cover_size((100, 200), (40, 20)) == (40, 80)


class TestResize:
    """Tests shared by both modes."""

    @pytest.mark.parametrize('mode', [Mode.FIT, Mode.CROP])
    def test_source_not_mutated(self, mode):
        """Test the source image is left untouched."""
        img = Image.new('RGB', (200, 100), color='red')
        before = img.tobytes()

        resize(img, (20, 20), mode)

        assert img.size == (200, 100)
        assert img.tobytes() == before

    @pytest.mark.parametrize('mode', [Mode.FIT, Mode.CROP])
    def test_deterministic(self, mode):
        """Test identical input gives identical output."""
        img = Image.linear_gradient('L').resize((123, 77))

        first = resize(img, (40, 30), mode)
        second = resize(img, (40, 30), mode)

        assert first.tobytes() == second.tobytes()

    @pytest.mark.parametrize('mode', [Mode.FIT, Mode.CROP])
    def test_zero_size_source(self, mode):
        """Test degenerate sources raise ImageProcessingError."""
        img = Image.new('RGB', (0, 10))

        with pytest.raises(ImageProcessingError):
            resize(img, (10, 10), mode)

    def test_invalid_target(self):
        """Test non-positive targets raise ImageProcessingError."""
        img = Image.new('RGB', (10, 10))

        with pytest.raises(ImageProcessingError):
            resize(img, (0, 10), Mode.FIT)
