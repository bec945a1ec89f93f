"""
S3Client - S3/MinIO/GCS storage backend for thumbnails.
"""

import logging
from typing import List, Optional

import boto3
import urllib3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .errors import ConfigError, StorageError
from .s3_config import S3Config
from .storage import normalize_key

NOT_FOUND_CODES = ('404', 'NoSuchKey', 'NotFound')


class S3Client:
    """
    Storage backend on an S3-compatible object store.

    Keys are relative to config.prefix. Uploads use a single put_object,
    so a key either holds the full new object or is left as it was.
    """

    def __init__(self, config: S3Config, logger: Optional[logging.Logger] = None):
        """
        Initialize S3 client.

        Args:
            config: S3 configuration
            logger: Optional logger instance
        """
        errors = config.validate()
        if errors:
            raise ConfigError(f"S3 configuration invalid: {'; '.join(errors)}")

        self.config = config
        self.logger = logger or logging.getLogger(__name__)

        if not config.verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self._client = boto3.client(
            's3',
            endpoint_url=config.endpoint,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region,
            config=Config(
                signature_version='s3v4',
                s3={'addressing_style': 'path'},
                retries={'max_attempts': 3, 'mode': 'standard'},
            ),
            verify=config.verify_ssl
        )

    @property
    def client(self):
        """Return the underlying boto3 client."""
        return self._client

    def _full_key(self, key: str) -> str:
        prefix = normalize_key(self.config.prefix or '')
        key = normalize_key(key)
        return f"{prefix}/{key}" if prefix else key

    def _relative_key(self, full_key: str) -> str:
        prefix = normalize_key(self.config.prefix or '')
        if prefix and full_key.startswith(f"{prefix}/"):
            return full_key[len(prefix) + 1:]
        return full_key

    def object_exists(self, key: str) -> bool:
        """Check if an object exists in S3."""
        try:
            self._client.head_object(Bucket=self.config.bucket, Key=self._full_key(key))
            return True
        except ClientError as e:
            if e.response['Error']['Code'] in NOT_FOUND_CODES:
                return False
            raise StorageError(f"Cannot check {key}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Cannot check {key}: {e}") from e

    def download_object(self, key: str) -> bytes:
        """Download an object from S3."""
        try:
            response = self._client.get_object(Bucket=self.config.bucket, Key=self._full_key(key))
            return response['Body'].read()
        except ClientError as e:
            if e.response['Error']['Code'] in NOT_FOUND_CODES:
                raise StorageError(f"Object not found: {key}") from e
            raise StorageError(f"Cannot download {key}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Cannot download {key}: {e}") from e

    def upload_object(
        self,
        key: str,
        data: bytes,
        content_type: str = 'application/octet-stream'
    ) -> None:
        """Upload an object to S3."""
        try:
            self._client.put_object(
                Bucket=self.config.bucket,
                Key=self._full_key(key),
                Body=data,
                ContentType=content_type
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Cannot upload {key}: {e}") from e

    def list_objects(self, prefix: Optional[str] = None) -> List[str]:
        """
        List object keys directly under a prefix.

        Args:
            prefix: Directory-like prefix, None for the root

        Returns:
            Keys relative to config.prefix, sorted
        """
        list_prefix = self._full_key(prefix or '')
        list_prefix = f"{list_prefix}/" if list_prefix else ''

        keys = []
        try:
            paginator = self._client.get_paginator('list_objects_v2')
            page_iterator = paginator.paginate(
                Bucket=self.config.bucket,
                Prefix=list_prefix,
                Delimiter='/',
            )
            for page in page_iterator:
                for obj in page.get('Contents', []):
                    if obj['Key'].endswith('/'):
                        continue
                    keys.append(self._relative_key(obj['Key']))
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Cannot list {prefix or '/'}: {e}") from e

        return sorted(keys)
