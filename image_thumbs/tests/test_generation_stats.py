"""Tests for GenerationResult and GenerationStats."""

import time

from image_thumbs.errors import StorageError
from image_thumbs.generation_stats import GenerationResult, GenerationStats, Status


class TestGenerationResult:
    """Tests for GenerationResult."""

    def test_constructors(self):
        """Test the per-status constructors."""
        error = StorageError('boom')

        assert GenerationResult.written('a', 'k', 10).status is Status.WRITTEN
        assert GenerationResult.skipped('a', 'k').size_bytes == 0
        failed = GenerationResult.failed('a', 'k', error)
        assert failed.status is Status.FAILED
        assert failed.error is error
        assert failed.ok is False


class TestGenerationStats:
    """Tests for GenerationStats."""

    def test_default_values(self):
        """Test default initialization."""
        stats = GenerationStats()

        assert stats.results == []
        assert stats.images == 0
        assert stats.written == 0
        assert stats.first_error is None

    def test_counts(self):
        """Test counts per status."""
        stats = GenerationStats(images=1)
        stats.add(GenerationResult.written('a', 'x/a.png', 100))
        stats.add(GenerationResult.written('b', 'x/b.png', 50))
        stats.add(GenerationResult.skipped('c', 'x/c.png'))

        assert stats.written == 2
        assert stats.skipped == 1
        assert stats.failed == 0
        assert stats.bytes_generated == 150
        assert stats.written_keys == ['x/a.png', 'x/b.png']

    def test_first_error_in_order(self):
        """Test first_error follows result order."""
        first = StorageError('first')
        stats = GenerationStats()
        stats.add(GenerationResult.written('a', 'k', 1))
        stats.add(GenerationResult.failed('b', 'k', first))
        stats.add(GenerationResult.failed('c', 'k', StorageError('second')))

        assert stats.failed == 2
        assert stats.first_error is first

    def test_merge(self):
        """Test merging runs."""
        one = GenerationStats(images=1)
        one.add(GenerationResult.written('a', 'k1', 1))
        two = GenerationStats(images=1)
        two.add(GenerationResult.skipped('a', 'k2'))

        one.merge(two)

        assert one.images == 2
        assert len(one.results) == 2

    def test_elapsed_seconds(self):
        """Test elapsed time calculation."""
        stats = GenerationStats(start_time=time.time() - 10)

        assert stats.elapsed_seconds >= 10
        assert stats.elapsed_seconds < 11

    def test_summary(self):
        """Test the summary line."""
        stats = GenerationStats()
        stats.add(GenerationResult.written('a', 'k', 2048))

        assert stats.summary().startswith('1 written, 0 skipped, 0 failed (2,048 bytes')
