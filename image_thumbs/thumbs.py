"""
ImageThumbs - Creates configured thumbnail variants for images in storage.
"""

import asyncio
import functools
import logging
import os
import posixpath
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Union

from . import codec, pipeline
from .config import load_settings
from .generation_stats import GenerationStats
from .pipeline import SourceImage
from .storage import AsyncStorage
from .thumbnail_spec import ThumbnailSet, ThumbnailSpec


class ImageThumbs:
    """
    Thumbnail generation context.

    Holds the validated settings, the async storage handle and a CPU thread
    pool for decode/resize/encode, kept apart from the storage I/O pool.

    Usage:
        storage = await AsyncStorage.connect(functools.partial(S3Client, S3Config.from_env()))
        async with await ImageThumbs.new('image_thumbs.yaml', storage) as thumbs:
            await thumbs.create_thumbs('penguin.png', '/thumbs')
    """

    def __init__(
        self,
        storage: AsyncStorage,
        settings: Union[ThumbnailSet, Iterable[ThumbnailSpec]],
        cpu_workers: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the thumbnail context.

        Args:
            storage: Initialized async storage handle
            settings: Thumbnail specs to produce for every image
            cpu_workers: Size of the CPU pool (default: number of CPUs)
            logger: Optional logger instance
        """
        if not isinstance(settings, ThumbnailSet):
            settings = ThumbnailSet(settings)

        self.storage = storage
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self._cpu_pool = ThreadPoolExecutor(
            max_workers=cpu_workers or os.cpu_count() or 1,
            thread_name_prefix='thumbs-cpu'
        )

    @classmethod
    async def new(cls, config: str, storage: AsyncStorage, **kwargs) -> 'ImageThumbs':
        """
        Create a context from a YAML settings file.

        Args:
            config: Path to the config file (.yaml may be omitted)
            storage: Initialized async storage handle
        """
        loop = asyncio.get_running_loop()
        settings = await loop.run_in_executor(None, load_settings, config)
        return cls(storage, settings, **kwargs)

    @classmethod
    def with_settings(
        cls,
        storage: AsyncStorage,
        settings: Union[ThumbnailSet, Iterable[ThumbnailSpec]],
        **kwargs
    ) -> 'ImageThumbs':
        return cls(storage, settings, **kwargs)

    async def __aenter__(self) -> 'ImageThumbs':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Wait for running work, then release the CPU pool and storage."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, functools.partial(self._cpu_pool.shutdown, wait=True))
        await loop.run_in_executor(None, self.storage.close)

    async def _run_cpu(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._cpu_pool, functools.partial(func, *args))

    def destination_keys(self, source_path: str, destination_prefix: str) -> List[str]:
        """Keys a create_thumbs call would write, in configuration order."""
        source = SourceImage.from_path(source_path)
        return [
            pipeline.destination_key(spec, source, destination_prefix)
            for spec in self.settings
        ]

    async def create_thumbs(
        self,
        source_path: str,
        destination_prefix: str,
        overwrite: bool = False
    ) -> GenerationStats:
        """
        Create all configured thumbnails for one image in storage.

        The image is read and decoded once; variants are produced
        concurrently from the shared decoded image.

        Args:
            source_path: Storage key of the original (PNG or JPEG)
            destination_prefix: Prefix for the thumbnail keys
            overwrite: If True, replace existing thumbnails; if False,
                       leave them untouched and report them as skipped

        Returns:
            GenerationStats with one result per spec

        Raises:
            UnsupportedFormatError: before any I/O, for non PNG/JPEG paths
            StorageError / ImageDecodeError: reading the original failed,
                no variant was attempted
            ThumbsError: the error of the first failed variant, after all
                variants have finished
        """
        source = SourceImage.from_path(source_path)
        data = await self.storage.get(source_path)
        return await self._create(data, source, destination_prefix, overwrite, source_path)

    async def create_thumbs_from_bytes(
        self,
        data: bytes,
        destination_prefix: str,
        image_name: str,
        extension: str,
        overwrite: bool = False
    ) -> GenerationStats:
        """
        Create all configured thumbnails for image bytes held by the caller.

        Args:
            data: Raw PNG or JPEG bytes
            destination_prefix: Prefix for the thumbnail keys
            image_name: Stem used for {image_stem}, without extension
            extension: Source extension (e.g. '.png'), selects the format and
                       is appended to every thumbnail key
            overwrite: Replace existing thumbnails
        """
        source = SourceImage.from_name(image_name, extension)
        return await self._create(
            data, source, destination_prefix, overwrite, f"{image_name}{source.extension}"
        )

    async def create_thumbs_dir(
        self,
        directory: Optional[str],
        destination_prefix: str,
        overwrite: bool = False
    ) -> GenerationStats:
        """
        Create thumbnails for every image directly under a directory.

        Without overwrite, images whose thumbnails all exist already are
        skipped without being downloaded. Images are handled one at a time
        and the first failing image aborts the run.

        Args:
            directory: Directory to scan, None for the storage root
            destination_prefix: Prefix for the thumbnail keys
            overwrite: Replace existing thumbnails
        """
        names = [key for key in await self.storage.list(directory) if codec.is_supported(key)]

        planned = {name: self.destination_keys(name, destination_prefix) for name in names}
        outputs = {key for keys in planned.values() for key in keys}
        names = [name for name in names if name not in outputs]

        if not overwrite:
            existing = set()
            for folder in sorted({posixpath.dirname(key) for key in outputs}):
                existing.update(await self.storage.list(folder or None))
            pending = [name for name in names if not set(planned[name]) <= existing]
            self.logger.info(
                f"{len(names) - len(pending)} of {len(names)} images in "
                f"{directory or '/'} already have all thumbnails"
            )
            names = pending

        stats = GenerationStats()
        for name in names:
            stats.merge(await self.create_thumbs(name, destination_prefix, overwrite))

        self.logger.info(f"Thumbnails for {stats.images} images in {directory or '/'}: {stats.summary()}")
        return stats

    async def _create(
        self,
        data: bytes,
        source: SourceImage,
        destination_prefix: str,
        overwrite: bool,
        label: str
    ) -> GenerationStats:
        """Decode once, fan out one pipeline per spec, aggregate."""
        stats = GenerationStats(images=1)
        image = await self._run_cpu(codec.decode, data, source.format)

        outcomes = await asyncio.gather(
            *(
                pipeline.generate(
                    self.storage, image, spec, source, destination_prefix,
                    overwrite, self._run_cpu, self.logger
                )
                for spec in self.settings
            ),
            return_exceptions=True
        )

        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
            stats.add(outcome)

        self.logger.info(f"Thumbnails for {label}: {stats.summary()}")

        error = stats.first_error
        if error is not None:
            raise error
        return stats
