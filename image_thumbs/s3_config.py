"""
S3Config - Connection settings for S3-compatible object stores.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

GCS_ENDPOINT = 'https://storage.googleapis.com'


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off', '')


@dataclass
class S3Config:
    """
    S3 connection settings.

    Attributes:
        endpoint: Endpoint URL, None for AWS
        bucket: Bucket name
        prefix: Key prefix all paths are relative to ('' for the bucket root)
        access_key: Access key id
        secret_key: Secret access key
        region: Region name
        verify_ssl: Verify TLS certificates
    """
    endpoint: Optional[str] = None
    bucket: Optional[str] = None
    prefix: str = ''
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    region: Optional[str] = None
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> 'S3Config':
        """Read settings from S3_* environment variables."""
        return cls(
            endpoint=os.getenv('S3_ENDPOINT'),
            bucket=os.getenv('S3_BUCKET'),
            prefix=os.getenv('S3_PREFIX', ''),
            access_key=os.getenv('S3_ACCESS_KEY'),
            secret_key=os.getenv('S3_SECRET_KEY'),
            region=os.getenv('S3_REGION'),
            verify_ssl=_env_flag('S3_VERIFY_SSL', True),
        )

    @classmethod
    def from_gcs_env(cls) -> 'S3Config':
        """
        Read Google Cloud Storage settings for its S3 interoperability API.

        Uses GOOGLE_BUCKET (or GOOGLE_BUCKET_NAME) and the HMAC key pair in
        GOOGLE_HMAC_ACCESS_ID / GOOGLE_HMAC_SECRET.

        Only HMAC keys are supported. Service account credentials
        (GOOGLE_SERVICE_ACCOUNT, GOOGLE_SERVICE_ACCOUNT_KEY) are not read;
        create an HMAC key for the service account in the Cloud Storage
        settings and use that instead.
        """
        return cls(
            endpoint=os.getenv('GOOGLE_STORAGE_ENDPOINT', GCS_ENDPOINT),
            bucket=os.getenv('GOOGLE_BUCKET') or os.getenv('GOOGLE_BUCKET_NAME'),
            prefix=os.getenv('GOOGLE_PREFIX', ''),
            access_key=os.getenv('GOOGLE_HMAC_ACCESS_ID'),
            secret_key=os.getenv('GOOGLE_HMAC_SECRET'),
            region=os.getenv('GOOGLE_REGION', 'auto'),
        )

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty if valid)."""
        errors = []
        if not self.bucket:
            errors.append("Bucket is not set (S3_BUCKET / GOOGLE_BUCKET)")
        if bool(self.access_key) != bool(self.secret_key):
            errors.append("Access key and secret key must be set together")
        if self.endpoint and not self.endpoint.startswith(('http://', 'https://')):
            errors.append(f"Endpoint must be an http(s) URL: {self.endpoint}")
        return errors
