"""S3 / MinIO asset host for the media library.

All keys live under ``{MEDIA_FOLDER}/``; ``build_media_key`` is the only place
keys are minted and ``delete_object`` refuses anything outside the folder.
"""

import logging
import os
import uuid
from datetime import datetime
from typing import Any
from urllib.parse import quote, unquote, urlparse

import boto3
import httpx
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from cms.core.config import settings

logger = logging.getLogger(__name__)

MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10 MB
MAX_LIST_RESULTS = 100

ALLOWED_CONTENT_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
    }
)

_EXTENSION_BY_TYPE = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}


class MediaError(Exception):
    """The asset host or a remote image source failed."""


class MediaValidationError(MediaError):
    """The file itself is not acceptable (type, size, missing input)."""


_minio_cred_warned = False


def _get_s3_client():  # type: ignore[no-untyped-def]
    global _minio_cred_warned  # noqa: PLW0603
    config_kwargs: dict = {"signature_version": "s3v4"}
    if settings.S3_ENDPOINT_URL:
        config_kwargs["s3"] = {"addressing_style": "path"}
    kwargs: dict = {
        "service_name": "s3",
        "region_name": settings.AWS_REGION,
        "config": Config(**config_kwargs),
    }
    if settings.S3_ENDPOINT_URL:
        kwargs["endpoint_url"] = settings.S3_ENDPOINT_URL
    if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
        kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
        kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY

    if settings.S3_ENDPOINT_URL and not _minio_cred_warned:
        env_key = os.environ.get("AWS_ACCESS_KEY_ID", "")
        if env_key.startswith("AKIA") and (
            not settings.AWS_ACCESS_KEY_ID or settings.AWS_ACCESS_KEY_ID.startswith("AKIA")
        ):
            logger.warning(
                "S3_ENDPOINT_URL points to MinIO but AWS_ACCESS_KEY_ID "
                "looks like a real AWS key (AKIA...). Uploads will be signed "
                "with AWS creds and fail against MinIO. "
                "Clear AWS_* env vars or set them to minioadmin in .env."
            )
        _minio_cred_warned = True

    return boto3.client(**kwargs)


def _get_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT, follow_redirects=True)


def public_url(key: str) -> str:
    """Browser-reachable URL of an object (path style for MinIO)."""
    quoted = quote(key)
    base = settings.S3_PUBLIC_ENDPOINT or settings.S3_ENDPOINT_URL
    if base:
        return f"{base.rstrip('/')}/{settings.S3_BUCKET}/{quoted}"
    return f"https://{settings.S3_BUCKET}.s3.{settings.AWS_REGION}.amazonaws.com/{quoted}"


def build_media_key(file_name: str) -> str:
    """``{MEDIA_FOLDER}/{uuid}-{safe_name}``."""
    safe_name = quote(file_name.strip().replace(" ", "_"), safe="._-") or "image"
    return f"{settings.MEDIA_FOLDER}/{uuid.uuid4()}-{safe_name}"


def normalize_content_type(content_type: str | None) -> str:
    return (content_type or "").split(";")[0].strip().lower()


def validate_upload(content_type: str | None, size: int) -> str:
    content_type = normalize_content_type(content_type)
    if content_type not in ALLOWED_CONTENT_TYPES:
        allowed = ", ".join(sorted(ALLOWED_CONTENT_TYPES))
        raise MediaValidationError(f"content_type must be one of: {allowed}")
    if size <= 0:
        raise MediaValidationError("File is empty")
    if size > MAX_UPLOAD_SIZE:
        raise MediaValidationError("File exceeds the 10 MB upload limit")
    return content_type


def asset_record(
    key: str,
    size: int,
    created_at: datetime | None = None,
    content_type: str | None = None,
) -> dict[str, Any]:
    """Media library entry for one stored object."""
    url = public_url(key)
    ext = key.rsplit(".", 1)[-1].lower() if "." in key.rsplit("/", 1)[-1] else ""
    return {
        "public_id": key,
        "secure_url": url,
        "url": url,
        "format": _EXTENSION_BY_TYPE.get(content_type or "", ext),
        "bytes": size,
        "created_at": created_at.isoformat() if created_at else None,
        "resource_type": "image",
    }


def upload_object(data: bytes, file_name: str, content_type: str) -> dict[str, Any]:
    """Store an image under the media folder and return its library entry."""
    content_type = validate_upload(content_type, len(data))
    key = build_media_key(file_name)
    try:
        _get_s3_client().put_object(
            Bucket=settings.S3_BUCKET,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
    except (BotoCoreError, ClientError) as exc:
        logger.warning("Upload of %s failed: %s", key, exc)
        raise MediaError(str(exc)) from exc
    logger.info("Uploaded %s (%d bytes)", key, len(data))
    return asset_record(key, len(data), datetime.now(), content_type)


def list_objects(limit: int = MAX_LIST_RESULTS) -> list[dict[str, Any]]:
    """Newest-first library entries under the media folder.

    S3 lists in key order and keys start with a random uuid, so every page is
    collected before sorting by upload time.
    """
    paginator = _get_s3_client().get_paginator("list_objects_v2")
    objects: list[dict[str, Any]] = []
    try:
        for page in paginator.paginate(Bucket=settings.S3_BUCKET, Prefix=f"{settings.MEDIA_FOLDER}/"):
            objects.extend(page.get("Contents", []))
    except (BotoCoreError, ClientError) as exc:
        logger.warning("Listing media failed: %s", exc)
        raise MediaError(str(exc)) from exc
    objects.sort(
        key=lambda obj: obj["LastModified"].timestamp() if obj.get("LastModified") else 0,
        reverse=True,
    )
    return [
        asset_record(obj["Key"], obj.get("Size", 0), obj.get("LastModified"))
        for obj in objects[:limit]
    ]


def delete_object(key: str) -> dict[str, str]:
    if not key.startswith(f"{settings.MEDIA_FOLDER}/") or ".." in key:
        raise MediaValidationError("public_id is outside the media folder")
    try:
        _get_s3_client().delete_object(Bucket=settings.S3_BUCKET, Key=key)
    except (BotoCoreError, ClientError) as exc:
        logger.warning("Delete of %s failed: %s", key, exc)
        raise MediaError(str(exc)) from exc
    logger.info("Deleted %s", key)
    return {"result": "ok"}


def _file_name_from_url(url: str) -> str:
    name = unquote(os.path.basename(urlparse(url).path))
    return name or "image"


async def import_from_url(image_url: str) -> dict[str, Any]:
    """Download a remote image and store it in the media folder."""
    if not image_url.startswith(("http://", "https://")):
        raise MediaValidationError("Image URL must be an http(s) URL")
    try:
        async with _get_http_client() as client:
            response = await client.get(image_url)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Fetching %s failed: %s", image_url, exc)
        raise MediaError(f"Could not download image: {exc}") from exc

    content_type = normalize_content_type(response.headers.get("content-type"))
    data = response.content
    file_name = _file_name_from_url(image_url)
    if "." not in file_name and content_type in _EXTENSION_BY_TYPE:
        file_name = f"{file_name}.{_EXTENSION_BY_TYPE[content_type]}"
    return await run_in_threadpool(upload_object, data, file_name, content_type)
