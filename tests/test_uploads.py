"""Unit tests for news_api.services.uploads.read_thumbnail: checks and guaranteed cleanup."""

import asyncio
import io
import unittest

import fastapi
from starlette.datastructures import Headers, UploadFile

from news_api.services.results import Failure, FailureKind, Success
from news_api.services.uploads import has_file, read_thumbnail
from tests.support import PNG_BYTES, make_settings


def _upload(data: bytes, content_type: str = "image/png", filename: str = "thumb.png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


async def _consume(upload: UploadFile, settings: object) -> object:
    async with read_thumbnail(upload, settings) as result:
        return result


class TestReadThumbnail(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = make_settings(MAX_THUMBNAIL_BYTES=1024)

    def test_returns_bytes_and_closes_file(self) -> None:
        upload = _upload(PNG_BYTES)
        result = asyncio.run(_consume(upload, self.settings))
        self.assertEqual(result, Success(PNG_BYTES))
        self.assertTrue(upload.file.closed)

    def test_rejects_disallowed_type_and_closes_file(self) -> None:
        upload = _upload(b"%PDF-1.7", content_type="application/pdf", filename="doc.pdf")
        result = asyncio.run(_consume(upload, self.settings))
        self.assertIsInstance(result, Failure)
        self.assertEqual(result.kind, FailureKind.INVALID_INPUT)
        self.assertTrue(upload.file.closed)

    def test_rejects_oversize_file(self) -> None:
        upload = _upload(b"\x00" * 1025)
        result = asyncio.run(_consume(upload, self.settings))
        self.assertEqual(result.kind, FailureKind.INVALID_INPUT)
        self.assertTrue(upload.file.closed)

    def test_rejects_empty_file(self) -> None:
        result = asyncio.run(_consume(_upload(b""), self.settings))
        self.assertEqual(result.kind, FailureKind.INVALID_INPUT)

    def test_read_timeout_is_reported_and_file_closed(self) -> None:
        settings = make_settings(UPLOAD_READ_TIMEOUT_SEC=0.05)
        upload = _upload(PNG_BYTES)

        async def slow_read(size: int = -1) -> bytes:
            await asyncio.sleep(1)
            return b""

        upload.read = slow_read  # type: ignore[method-assign]
        result = asyncio.run(_consume(upload, settings))
        self.assertEqual(result.kind, FailureKind.UPLOAD_TIMEOUT)
        self.assertTrue(upload.file.closed)

    def test_closes_file_when_body_raises(self) -> None:
        upload = _upload(PNG_BYTES)

        async def run() -> None:
            async with read_thumbnail(upload, self.settings):
                raise RuntimeError("store exploded")

        with self.assertRaises(RuntimeError):
            asyncio.run(run())
        self.assertTrue(upload.file.closed)


class TestHasFile(unittest.TestCase):
    def test_detects_real_file_only(self) -> None:
        self.assertTrue(has_file(_upload(PNG_BYTES)))
        self.assertFalse(has_file(_upload(b"", filename="")))
        self.assertFalse(has_file(None))
        self.assertFalse(has_file(""))

    def test_accepts_both_upload_classes(self) -> None:
        # Form parsing produces the Starlette class; fastapi.UploadFile subclasses it.
        self.assertIs(type(_upload(PNG_BYTES)), UploadFile)
        self.assertTrue(has_file(_upload(PNG_BYTES)))
        self.assertTrue(
            has_file(fastapi.UploadFile(file=io.BytesIO(PNG_BYTES), filename="thumb.png"))
        )


if __name__ == "__main__":
    unittest.main()
