"""
S3/MinIO image hosting for posts and profile pictures.

Clients send images as raw payloads (``data:image/png;base64,...`` or bare
base64). They are uploaded to a public bucket under ``<IMG-id>.<ext>`` and
replaced by their public URL. The object key is the last path segment of that
URL, which is how assets are later destroyed.
"""

import base64
import binascii
import io
import logging
import re
from functools import lru_cache
from typing import Optional, Tuple
from urllib.parse import urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError, BotoCoreError

from config import settings
from src.errors import InternalError, ValidationError
from src.id_generator import generate_public_id

logger = logging.getLogger(__name__)

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w=-]+)*;base64,(?P<data>.*)$", re.DOTALL)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


def is_hosted_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def parse_image_payload(payload: str) -> Tuple[bytes, str]:
    """
    Decode a raw image payload.

    Returns:
        (data, content_type)

    Raises:
        ValidationError: payload is not valid base64
    """
    content_type = "image/jpeg"
    data = payload.strip()
    match = _DATA_URI_RE.match(data)
    if match:
        content_type = match.group("mime") or content_type
        data = match.group("data")
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Invalid image payload")
    if not raw:
        raise ValidationError("Invalid image payload")
    return raw, content_type


def asset_key_from_url(url: str) -> Optional[str]:
    """Object key of a hosted asset: the last segment of its URL path."""
    if not url:
        return None
    segment = urlparse(url).path.rstrip("/").split("/")[-1]
    return segment or None


class ImageHost:
    """
    Thin boto3 wrapper for uploading and destroying hosted images.
    """

    def __init__(
        self,
        endpoint_url: str,
        access_key: str,
        secret_key: str,
        bucket_name: str,
        region: str = "us-east-1",
        public_base_url: Optional[str] = None,
    ):
        self.endpoint_url = endpoint_url
        self.bucket_name = bucket_name
        self.region = region
        self.public_base_url = public_base_url

        # Path-style addressing keeps MinIO and S3 URLs in the same shape
        config = Config(
            signature_version='s3v4',
            s3={'addressing_style': 'path'}
        )
        self.s3_client = boto3.client(
            's3',
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=config
        )
        logger.info("Image host initialized: endpoint=%s bucket=%s", endpoint_url, bucket_name)

    def get_public_url(self, key: str) -> str:
        base = self.public_base_url or f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}"
        return f"{base.rstrip('/')}/{key}"

    def upload(self, payload: str) -> str:
        """
        Upload a raw image payload and return its public URL.

        Raises:
            ValidationError: payload could not be decoded
            InternalError: the object store rejected the upload
        """
        data, content_type = parse_image_payload(payload)
        ext = _EXTENSIONS.get(content_type, "bin")
        key = f"{generate_public_id('image')}.{ext}"
        try:
            self.s3_client.upload_fileobj(
                io.BytesIO(data),
                self.bucket_name,
                key,
                ExtraArgs={'ContentType': content_type, 'ACL': 'public-read'}
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to upload image %s: %s", key, e)
            raise InternalError("Image upload failed") from e
        logger.info("Uploaded image %s (%d bytes)", key, len(data))
        return self.get_public_url(key)

    def destroy(self, url: str) -> bool:
        """
        Delete the asset behind ``url``. Best effort: failures are logged and
        reported as False, never raised.
        """
        key = asset_key_from_url(url)
        if not key:
            return False
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.warning("Failed to destroy image %s: %s", key, e)
            return False
        logger.info("Destroyed image %s", key)
        return True


@lru_cache(maxsize=1)
def get_image_host() -> ImageHost:
    """FastAPI dependency: process-wide image host built from settings."""
    return ImageHost(
        endpoint_url=settings.S3_ENDPOINT_URL,
        access_key=settings.S3_ACCESS_KEY,
        secret_key=settings.S3_SECRET_KEY,
        bucket_name=settings.S3_BUCKET_NAME,
        region=settings.S3_REGION,
        public_base_url=settings.S3_PUBLIC_BASE_URL,
    )
