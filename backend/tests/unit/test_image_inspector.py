"""
Name: HTTP Image Inspector Unit Tests

Responsibilities:
  - Verify status, content type, size and format checks
  - Verify transport failures are reported as fetch errors

Notes:
  - Uses httpx.MockTransport; no network access
  - Test images are generated with Pillow
"""

from io import BytesIO

import httpx
import pytest
from PIL import Image

from marketplace.exceptions import ImageFetchError
from marketplace.infrastructure.services.image_inspector import HttpImageInspector


pytestmark = pytest.mark.unit

IMAGE_URL = "https://images.example.com/bike.png"


def _image_bytes(image_format: str) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format=image_format)
    return buffer.getvalue()


def _inspector(handler, max_bytes: int = 5 * 1024 * 1024) -> HttpImageInspector:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpImageInspector(max_bytes=max_bytes, client=client)


def _serve(status_code: int = 200, content: bytes = b"", content_type: str = "image/png"):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code, content=content, headers={"Content-Type": content_type}
        )

    return handler


def _error_message(inspector: HttpImageInspector) -> str:
    with pytest.raises(ImageFetchError) as exc_info:
        inspector.inspect(IMAGE_URL)
    return exc_info.value.message


@pytest.mark.parametrize(
    "image_format, content_type",
    [("PNG", "image/png"), ("JPEG", "image/jpeg"), ("GIF", "image/gif")],
)
def test_supported_images_pass(image_format, content_type):
    inspector = _inspector(_serve(content=_image_bytes(image_format), content_type=content_type))

    inspector.inspect(IMAGE_URL)


def test_content_type_parameters_are_ignored():
    inspector = _inspector(
        _serve(content=_image_bytes("PNG"), content_type="image/png; charset=binary")
    )

    inspector.inspect(IMAGE_URL)


def test_non_200_status():
    assert _error_message(_inspector(_serve(status_code=404))) == (
        "error - image is not available: 404"
    )


def test_unsupported_content_type():
    inspector = _inspector(_serve(content=b"<html></html>", content_type="text/html"))

    assert _error_message(inspector) == "error - unsupported content type: text/html"


def test_image_too_large():
    inspector = _inspector(_serve(content=_image_bytes("PNG")), max_bytes=16)

    assert _error_message(inspector).startswith("error - image too large: 17, but need 16")


def test_body_that_is_not_an_image():
    inspector = _inspector(_serve(content=b"definitely not a png"))

    assert _error_message(inspector).startswith("error - invalid image format:")


def test_image_of_other_format_is_rejected():
    inspector = _inspector(_serve(content=_image_bytes("BMP"), content_type="image/png"))

    assert _error_message(inspector) == "error - invalid image format: unsupported format BMP"


def test_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert _error_message(_inspector(handler)).startswith("error fetching image from url:")


def test_oversized_dimensions_are_invalid_format(oversized_png):
    inspector = _inspector(_serve(content=oversized_png))

    assert _error_message(inspector).startswith("error - invalid image format:")
