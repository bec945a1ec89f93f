"""
LocalClient - Local filesystem storage backend.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from typing import List, Optional

from .errors import ConfigError, StorageError
from .storage import normalize_key


@dataclass
class LocalConfig:
    """
    Local filesystem settings.

    Attributes:
        root_path: Existing directory holding the objects
        prefix: Sub-directory of root_path all keys are relative to
    """
    root_path: str
    prefix: str = ''

    @property
    def base_path(self) -> str:
        return os.path.abspath(os.path.join(self.root_path, normalize_key(self.prefix)))

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty if valid)."""
        errors = []
        if not self.root_path:
            errors.append("Local root path is not set")
        elif not os.path.isdir(self.root_path):
            errors.append(f"Local root path is not a directory: {self.root_path}")
        return errors


class LocalClient:
    """
    Storage backend on a directory tree.

    Uploads go to a temporary file in the target directory that is then
    renamed over the destination, so readers never see partial files.
    """

    def __init__(self, config: LocalConfig, logger: Optional[logging.Logger] = None):
        """
        Initialize local client.

        Args:
            config: Local configuration
            logger: Optional logger instance
        """
        errors = config.validate()
        if errors:
            raise ConfigError(f"Local configuration invalid: {'; '.join(errors)}")

        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.base_path = config.base_path

    def _path(self, key: str) -> str:
        """Map a key to a filesystem path inside base_path."""
        path = os.path.abspath(os.path.join(self.base_path, normalize_key(key)))
        if path != self.base_path and not path.startswith(self.base_path + os.sep):
            raise StorageError(f"Key escapes storage root: {key}")
        return path

    def object_exists(self, key: str) -> bool:
        return os.path.isfile(self._path(key))

    def download_object(self, key: str) -> bytes:
        path = self._path(key)
        try:
            with open(path, 'rb') as f:
                return f.read()
        except FileNotFoundError as e:
            raise StorageError(f"Object not found: {key}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {key}: {e}") from e

    def upload_object(
        self,
        key: str,
        data: bytes,
        content_type: str = 'application/octet-stream'
    ) -> None:
        path = self._path(key)
        directory = os.path.dirname(path)
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.upload-')
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            raise StorageError(f"Cannot write {key}: {e}") from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def list_objects(self, prefix: Optional[str] = None) -> List[str]:
        """List files directly under prefix, as keys relative to base_path."""
        directory = self._path(prefix or '')
        if not os.path.isdir(directory):
            return []

        base = normalize_key(prefix or '')
        keys = []
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.is_file() and not entry.name.startswith('.upload-'):
                        keys.append(f"{base}/{entry.name}" if base else entry.name)
        except OSError as e:
            raise StorageError(f"Cannot list {prefix or '/'}: {e}") from e
        return sorted(keys)
