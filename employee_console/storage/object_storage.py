import boto3
import logging
from typing import Optional
from botocore.exceptions import BotoCoreError, ClientError

from employee_console.core.config import Settings
from employee_console.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class ObjectStorage:
    """S3 compatible bucket that category images are written to"""

    def __init__(
        self,
        bucket_name: str,
        public_base_url: str,
        endpoint_url: Optional[str] = None,
        region: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        s3_client=None,
    ):
        """Initialize S3 client"""
        self.bucket_name = bucket_name
        self.public_base_url = public_base_url.rstrip("/")
        self.s3_client = s3_client or boto3.client(
            "s3",
            endpoint_url=endpoint_url or None,
            aws_access_key_id=access_key_id or None,
            aws_secret_access_key=secret_access_key or None,
            region_name=region or None,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ObjectStorage":
        return cls(
            bucket_name=settings.STORAGE_BUCKET,
            public_base_url=settings.storage_public_base_url,
            endpoint_url=settings.STORAGE_ENDPOINT_URL,
            region=settings.AWS_REGION,
            access_key_id=settings.AWS_ACCESS_KEY_ID,
            secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        )

    def upload(self, object_path: str, body: bytes, content_type: str) -> None:
        """
        Write an object, replacing any object already at the path.

        Raises:
            UpstreamError: If the storage service rejects the write
        """
        try:
            logger.info(f"Uploading to storage: {self.bucket_name}/{object_path} ({len(body)} bytes)")
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=object_path,
                Body=body,
                ContentType=content_type,
            )
        except ClientError as e:
            message = e.response.get("Error", {}).get("Message") or str(e)
            logger.error(f"Storage rejected upload of {object_path}: {message}")
            raise UpstreamError(message or "Upload failed")
        except BotoCoreError as e:
            logger.error(f"Storage unreachable while uploading {object_path}: {e}")
            raise UpstreamError(str(e) or "Upload failed")

    def get_public_url(self, object_path: str) -> str:
        """Public URL of an object in the bucket"""
        return f"{self.public_base_url}/{object_path.lstrip('/')}"

    def check_access(self) -> None:
        """Raise if the bucket cannot be reached with the configured credentials"""
        self.s3_client.head_bucket(Bucket=self.bucket_name)
