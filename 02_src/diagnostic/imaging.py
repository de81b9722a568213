"""Image transport encoding."""

import base64
import binascii
import re

from .models import EncodedImage

DEFAULT_IMAGE_MIME = "image/jpeg"

_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,]*)?;base64,(?P<data>.*)$", re.S)


def encode_image(raw: bytes, mime_type: str = DEFAULT_IMAGE_MIME) -> EncodedImage:
    """Encode image bytes for inclusion in a chat request."""
    _check_mime(mime_type)
    return EncodedImage(mime_type=mime_type, data=base64.b64encode(raw).decode("ascii"))


def parse_data_uri(value: str) -> EncodedImage:
    """Strip the data-URI prefix produced by a browser file reader.

    A bare base64 string is accepted as a JPEG.
    """
    value = value.strip()
    match = _DATA_URI.match(value)
    if match:
        mime_type = match.group("mime") or DEFAULT_IMAGE_MIME
        data = match.group("data").strip()
    elif value.startswith("data:"):
        raise ValueError("Only base64 data URIs are supported")
    else:
        mime_type, data = DEFAULT_IMAGE_MIME, value

    _check_mime(mime_type)
    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image payload: {e}") from e
    if not data:
        raise ValueError("Empty image payload")
    return EncodedImage(mime_type=mime_type, data=data)


def decode_image(image: EncodedImage) -> bytes:
    return base64.b64decode(image.data)


def _check_mime(mime_type: str) -> None:
    if not mime_type.startswith("image/"):
        raise ValueError(f"Unsupported attachment type: {mime_type}")
