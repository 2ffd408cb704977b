"""S3 compatible object storage for uploaded media.

- original/{millis}-{sanitised name}   uploaded image bytes

Works against AWS S3 or a MinIO endpoint (``endpoint_url``).
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class MediaStorage:
    """Put, delete and locate media objects in one bucket."""

    def __init__(
        self,
        bucket_name: str,
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        region: str = "us-east-1",
        public_base_url: Optional[str] = None,
    ) -> None:
        self.bucket_name = bucket_name
        self.endpoint_url = endpoint_url
        self.public_base_url = public_base_url
        self.region = region
        self.s3_client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region,
        )
        self._bucket_ready = False

    @staticmethod
    def safe_name(value: str, max_len: int = 100) -> str:
        # keep object keys URL safe (anything else -> _)
        safe = "".join(c if c.isalnum() or c in ("-", "_", ".") else "_" for c in value)
        return safe[-max_len:] if len(safe) > max_len else safe

    def ensure_bucket(self) -> None:
        """Create the bucket with a public-read policy if it does not exist."""
        if self._bucket_ready:
            return
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
        except ClientError:
            self.s3_client.create_bucket(Bucket=self.bucket_name)
            policy = {
                "Version": "2012-10-17",
                "Statement": [
                    {
                        "Effect": "Allow",
                        "Principal": {"AWS": ["*"]},
                        "Action": ["s3:GetObject"],
                        "Resource": [f"arn:aws:s3:::{self.bucket_name}/*"],
                    }
                ],
            }
            self.s3_client.put_bucket_policy(Bucket=self.bucket_name, Policy=json.dumps(policy))
            logger.info("bucket %s created with public read policy", self.bucket_name)
        self._bucket_ready = True

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``key`` and return its public URL."""
        self.ensure_bucket()
        self.s3_client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        return self.public_url(key)

    def exists(self, key: str) -> bool:
        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError:
            return False

    def delete(self, key: str) -> None:
        self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
