"""
Storage - Capability protocol for storage backends and the async handle
used by the thumbnail pipeline.

A backend is any object with download_object / upload_object /
object_exists / list_objects. Backends are blocking; AsyncStorage runs
them on its own I/O thread pool.
"""

import asyncio
import functools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Protocol

from .errors import StorageError


class StorageClient(Protocol):
    """Blocking storage backend. Keys are relative paths without a leading '/'."""

    def download_object(self, key: str) -> bytes:
        ...

    def upload_object(
        self, key: str, data: bytes, content_type: str = 'application/octet-stream'
    ) -> None:
        ...

    def object_exists(self, key: str) -> bool:
        ...

    def list_objects(self, prefix: Optional[str] = None) -> List[str]:
        ...


def normalize_key(key: str) -> str:
    """Strip leading and trailing '/' from a storage key."""
    return key.strip('/')


class MemoryClient:
    """
    In-memory storage backend.

    Objects live in a dict, so every upload replaces the whole value at once.
    """

    def __init__(self, objects: Optional[Dict[str, bytes]] = None):
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self._lock = threading.Lock()
        for key, data in (objects or {}).items():
            self.objects[normalize_key(key)] = data

    def download_object(self, key: str) -> bytes:
        with self._lock:
            try:
                return self.objects[normalize_key(key)]
            except KeyError:
                raise StorageError(f"Object not found: {key}") from None

    def upload_object(
        self, key: str, data: bytes, content_type: str = 'application/octet-stream'
    ) -> None:
        key = normalize_key(key)
        with self._lock:
            self.objects[key] = bytes(data)
            self.content_types[key] = content_type

    def object_exists(self, key: str) -> bool:
        with self._lock:
            return normalize_key(key) in self.objects

    def list_objects(self, prefix: Optional[str] = None) -> List[str]:
        """List keys directly under prefix (no recursion)."""
        base = normalize_key(prefix or '')
        base = f"{base}/" if base else ''
        with self._lock:
            keys = list(self.objects)
        return sorted(
            key for key in keys
            if key.startswith(base) and '/' not in key[len(base):]
        )


class AsyncStorage:
    """
    Async handle over a blocking storage backend.

    Calls run on a dedicated thread pool so the event loop never blocks on
    network or disk I/O. A call that has reached the pool runs to completion
    even if the awaiting task is cancelled.
    """

    def __init__(
        self,
        client: StorageClient,
        max_workers: int = 8,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize async storage.

        Args:
            client: Blocking storage backend
            max_workers: Size of the I/O thread pool
            logger: Optional logger instance
        """
        self.client = client
        self.logger = logger or logging.getLogger(__name__)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix='thumbs-io'
        )

    @classmethod
    async def connect(
        cls,
        factory: Callable[[], StorageClient],
        max_workers: int = 8,
        logger: Optional[logging.Logger] = None
    ) -> 'AsyncStorage':
        """
        Build the backend off the event loop and wrap it.

        Args:
            factory: Callable returning a storage backend, e.g.
                     functools.partial(S3Client, S3Config.from_env())
        """
        loop = asyncio.get_running_loop()
        client = await loop.run_in_executor(None, factory)
        return cls(client, max_workers=max_workers, logger=logger)

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(func, *args))

    async def get(self, key: str) -> bytes:
        self.logger.debug(f"Downloading: {key}")
        return await self._run(self.client.download_object, key)

    async def put(
        self, key: str, data: bytes, content_type: str = 'application/octet-stream'
    ) -> None:
        self.logger.debug(f"Uploading: {key} ({len(data)} bytes)")
        await self._run(self.client.upload_object, key, data, content_type)

    async def exists(self, key: str) -> bool:
        return await self._run(self.client.object_exists, key)

    async def list(self, prefix: Optional[str] = None) -> List[str]:
        return await self._run(self.client.list_objects, prefix)

    def close(self) -> None:
        """Wait for in-flight calls and release the I/O pool."""
        self._executor.shutdown(wait=True)
