"""Thumbnail upload handling: bounded read, type/size checks, guaranteed cleanup."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from starlette.datastructures import UploadFile

from news_api.services.results import Failure, FailureKind, Result, Success

if TYPE_CHECKING:
    from news_api.core.config import Settings

logger = logging.getLogger(__name__)


def has_file(upload: UploadFile | str | None) -> bool:
    """
    True if the multipart field actually carried a file (browsers send an empty part otherwise).

    Form parsing yields Starlette's UploadFile, of which fastapi.UploadFile is only a subclass.
    """
    return isinstance(upload, UploadFile) and bool(upload.filename)


async def _read_bounded(upload: UploadFile, settings: "Settings") -> Result[bytes]:
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    if content_type not in settings.ALLOWED_THUMBNAIL_TYPES:
        return Failure(
            FailureKind.INVALID_INPUT,
            "Thumbnail must be one of: " + ", ".join(settings.ALLOWED_THUMBNAIL_TYPES),
        )
    try:
        # Read one byte past the limit so oversize files are detected without reading them whole.
        data = await asyncio.wait_for(
            upload.read(settings.MAX_THUMBNAIL_BYTES + 1),
            timeout=settings.UPLOAD_READ_TIMEOUT_SEC,
        )
    except asyncio.TimeoutError:
        logger.warning("Thumbnail read timed out after %ss", settings.UPLOAD_READ_TIMEOUT_SEC)
        return Failure(FailureKind.UPLOAD_TIMEOUT, "Timed out reading thumbnail upload")
    if len(data) > settings.MAX_THUMBNAIL_BYTES:
        return Failure(
            FailureKind.INVALID_INPUT,
            f"Thumbnail must not exceed {settings.MAX_THUMBNAIL_BYTES} bytes",
        )
    if not data:
        return Failure(FailureKind.INVALID_INPUT, "Thumbnail file is empty")
    return Success(data)


@asynccontextmanager
async def read_thumbnail(
    upload: UploadFile,
    settings: "Settings",
) -> AsyncIterator[Result[bytes]]:
    """
    Yield the uploaded thumbnail's bytes (or a Failure) and always release the upload.

    Closing the UploadFile deletes its spooled temporary file, on success,
    on failure and when the body of the ``async with`` raises.
    """
    try:
        yield await _read_bounded(upload, settings)
    finally:
        await upload.close()
