import boto3
from botocore.exceptions import ClientError
from portal.config import settings
import logging

logger = logging.getLogger(__name__)


class S3BlobStore:
    def __init__(self, client=None):
        if not settings.s3_configured:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = client or boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name

    def put(self, path: str, data: bytes, content_type: str) -> str:
        """Upload blob to S3; refuses to replace an existing key."""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=path,
                Body=data,
                ContentType=content_type,
                IfNoneMatch="*"
            )
            return path
        except ClientError as e:
            logger.error(f"Failed to upload file to S3: {str(e)}")
            raise

    def get(self, path: str) -> bytes:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=path)
            return response["Body"].read()
        except ClientError as e:
            logger.error(f"Failed to download file from S3: {str(e)}")
            raise

    def delete(self, path: str) -> None:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=path)
        except ClientError as e:
            logger.error(f"Failed to delete file from S3: {str(e)}")
            raise
