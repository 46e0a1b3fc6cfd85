"""
Name: HTTP Image Inspector

Responsibilities:
  - Fetch an ad image URL with a bounded timeout
  - Check status, declared content type and size
  - Sniff the bytes to confirm a JPEG, PNG or GIF image

Collaborators:
  - httpx (HTTP client)
  - Pillow (image format identification)
  - domain.services.ImageInspector

Constraints:
  - Reads at most max_bytes + 1 bytes of the body
  - Every failure is an ImageFetchError with a client-facing message
"""

from __future__ import annotations

from io import BytesIO

import httpx
from PIL import Image, UnidentifiedImageError

from ...exceptions import ImageFetchError
from ...logger import logger

SUPPORTED_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/gif"})
SUPPORTED_FORMATS = frozenset({"JPEG", "PNG", "GIF"})

REPORT_ERROR_FETCHING_IMG_FROM_URL = "error fetching image from url: {}"
REPORT_ERROR_UNAVAILABLE_IMG = "error - image is not available: {}"
REPORT_ERROR_UNSUPPORTED_CONTENT_TYPE = "error - unsupported content type: {}"
REPORT_ERROR_READING_IMG = "error reading image: {}"
REPORT_ERROR_LARGE_IMG = "error - image too large: {}, but need {}"
REPORT_INVALID_FORMAT_IMG = "error - invalid image format: {}"


class HttpImageInspector:
    """R: ImageInspector that downloads and sniffs the image over HTTP."""

    def __init__(
        self,
        *,
        timeout_s: float = 15.0,
        max_bytes: int = 5 * 1024 * 1024,
        client: httpx.Client | None = None,
    ):
        self._timeout = timeout_s
        self._max_bytes = max_bytes
        self._client = client

    def inspect(self, url: str) -> None:
        client = self._client or httpx.Client(timeout=self._timeout, follow_redirects=True)
        try:
            body = self._download(client, url)
        finally:
            if self._client is None:
                client.close()

        logger.info("Image fetched", extra={"image_bytes": len(body)})
        if len(body) > self._max_bytes:
            raise ImageFetchError(REPORT_ERROR_LARGE_IMG.format(len(body), self._max_bytes))

        self._check_format(body)

    def _download(self, client: httpx.Client, url: str) -> bytes:
        try:
            with client.stream("GET", url) as response:
                if response.status_code != httpx.codes.OK:
                    raise ImageFetchError(REPORT_ERROR_UNAVAILABLE_IMG.format(response.status_code))

                content_type = response.headers.get("Content-Type", "")
                media_type = content_type.split(";", 1)[0].strip().lower()
                if media_type not in SUPPORTED_CONTENT_TYPES:
                    logger.info("Unsupported image content type", extra={"content_type": content_type})
                    raise ImageFetchError(REPORT_ERROR_UNSUPPORTED_CONTENT_TYPE.format(content_type))

                return self._read_limited(response)
        except httpx.HTTPError as exc:
            raise ImageFetchError(
                REPORT_ERROR_FETCHING_IMG_FROM_URL.format(exc), original_error=exc
            ) from exc

    def _read_limited(self, response: httpx.Response) -> bytes:
        body = bytearray()
        try:
            for chunk in response.iter_bytes():
                body.extend(chunk)
                if len(body) > self._max_bytes:
                    break
        except httpx.HTTPError as exc:
            raise ImageFetchError(REPORT_ERROR_READING_IMG.format(exc), original_error=exc) from exc
        return bytes(body[: self._max_bytes + 1])

    @staticmethod
    def _check_format(body: bytes) -> None:
        try:
            with Image.open(BytesIO(body)) as image:
                image_format = image.format
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ImageFetchError(REPORT_INVALID_FORMAT_IMG.format(exc), original_error=exc) from exc

        if image_format not in SUPPORTED_FORMATS:
            raise ImageFetchError(
                REPORT_INVALID_FORMAT_IMG.format(f"unsupported format {image_format}")
            )
