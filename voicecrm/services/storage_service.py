"""
Object Storage Service
Issues pre-signed S3 URLs for business logos and agent audio
"""

import time
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from voicecrm.core.config import settings
from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import ExternalServiceError

logger = get_logger(__name__)


class StorageService:
    """Thin wrapper over boto3 pre-signed URL generation"""

    def __init__(self, client=None):
        self.bucket = settings.s3_bucket_name
        self.expires_in = settings.s3_url_expiry_seconds
        self.client = client or boto3.client(
            "s3",
            region_name=settings.s3_region,
            aws_access_key_id=settings.aws_access_key_id or None,
            aws_secret_access_key=settings.aws_secret_access_key or None
        )

    def put_object_url(self, key: str, content_type: str) -> str:
        """Pre-signed URL the browser can PUT the file to"""
        try:
            url = self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key, "ContentType": content_type},
                ExpiresIn=self.expires_in
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to sign upload URL: {e}", key=key)
            raise ExternalServiceError("s3", f"Could not create upload URL: {e}")
        logger.debug("Signed upload URL", key=key)
        return url

    def get_object_url(self, key: str) -> str:
        """Pre-signed URL for reading an object"""
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.expires_in
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to sign download URL: {e}", key=key)
            raise ExternalServiceError("s3", f"Could not create download URL: {e}")

    @staticmethod
    def build_key(prefix: str, file_name: str) -> str:
        """Namespaced key with a millisecond timestamp, e.g. businessLogo/1700000000000_logo.png"""
        return f"{prefix}/{int(time.time() * 1000)}_{file_name}"


_storage_service: Optional[StorageService] = None


def get_storage_service() -> StorageService:
    """Get the process-wide storage service"""
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService()
    return _storage_service
