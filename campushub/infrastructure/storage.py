"""Azure Blob Storage utilities for event images."""

from __future__ import annotations

import logging
import uuid
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Optional

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

from campushub.config import get_settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class StorageConfigurationError(RuntimeError):
    """Raised when object storage credentials are missing."""


class StorageError(RuntimeError):
    """Raised when the storage service rejects an operation."""


@lru_cache
def _get_blob_service_client() -> BlobServiceClient:
    settings = get_settings()
    if not settings.azure_storage_connection_string:
        msg = "Azure storage connection string is not configured"
        raise StorageConfigurationError(msg)
    return BlobServiceClient.from_connection_string(
        settings.azure_storage_connection_string
    )


@lru_cache
def _get_container_client():
    service_client = _get_blob_service_client()
    container_name = get_settings().azure_storage_container_name
    try:
        service_client.create_container(container_name, public_access="blob")
    except ResourceExistsError:
        pass
    return service_client.get_container_client(container_name)


def build_event_image_path(event_id: int, filename: str, content_type: str) -> str:
    suffix = PurePosixPath(filename or "").suffix.lower() or ALLOWED_IMAGE_TYPES.get(
        content_type, ""
    )
    return f"events/{event_id}/{uuid.uuid4().hex}{suffix}"


def upload_event_image(
    event_id: int,
    filename: str,
    data: bytes,
    *,
    content_type: Optional[str] = None,
) -> str:
    """Upload an event image and return its public URL."""

    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValueError("Unsupported image type")
    if not data:
        raise ValueError("Image file is empty")

    container_client = _get_container_client()
    blob_path = build_event_image_path(event_id, filename, content_type)
    blob_client = container_client.get_blob_client(blob_path)
    try:
        blob_client.upload_blob(
            data,
            overwrite=True,
            content_settings=ContentSettings(content_type=content_type),
        )
    except AzureError as exc:
        logger.error("Failed to upload image for event %s: %s", event_id, exc)
        raise StorageError("Failed to upload image") from exc
    logger.info("Uploaded image %s for event %s", blob_path, event_id)
    return blob_client.url


def delete_blob_by_url(url: str) -> None:
    """Delete a previously uploaded blob if it belongs to the container."""

    container_client = _get_container_client()
    prefix = container_client.url.rstrip("/") + "/"
    if not url.startswith(prefix):
        return
    blob_client = container_client.get_blob_client(url[len(prefix):])
    try:
        blob_client.delete_blob()
    except ResourceNotFoundError:
        return


__all__ = [
    "ALLOWED_IMAGE_TYPES",
    "StorageConfigurationError",
    "StorageError",
    "build_event_image_path",
    "upload_event_image",
    "delete_blob_by_url",
]
