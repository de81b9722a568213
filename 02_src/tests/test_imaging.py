"""Tests for image transport encoding."""

import base64

import pytest

from diagnostic.imaging import decode_image, encode_image, parse_data_uri

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01"


class TestRoundTrip:
    """Tests for encoding and decoding image bytes."""

    def test_data_uri_round_trip(self):
        """Test that stripping the prefix yields the original bytes."""
        image = encode_image(PNG_BYTES, "image/png")

        parsed = parse_data_uri(image.data_uri)

        assert parsed == image
        assert decode_image(parsed) == PNG_BYTES

    def test_raw_payload_has_no_prefix(self):
        image = encode_image(PNG_BYTES, "image/png")

        assert not image.data.startswith("data:")
        assert image.data_uri.startswith("data:image/png;base64,")


class TestParseDataUri:
    """Tests for parse_data_uri()."""

    def test_browser_reader_output(self):
        raw = base64.b64encode(b"jpeg-bytes").decode()

        image = parse_data_uri(f"data:image/jpeg;base64,{raw}")

        assert image.mime_type == "image/jpeg"
        assert image.data == raw

    def test_bare_base64_defaults_to_jpeg(self):
        raw = base64.b64encode(b"jpeg-bytes").decode()

        image = parse_data_uri(raw)

        assert image.mime_type == "image/jpeg"
        assert decode_image(image) == b"jpeg-bytes"

    def test_rejects_non_image(self):
        raw = base64.b64encode(b"%PDF").decode()

        with pytest.raises(ValueError):
            parse_data_uri(f"data:application/pdf;base64,{raw}")

    def test_rejects_invalid_base64(self):
        with pytest.raises(ValueError):
            parse_data_uri("data:image/png;base64,not*base64")

    def test_rejects_non_base64_data_uri(self):
        with pytest.raises(ValueError):
            parse_data_uri("data:image/svg+xml,<svg></svg>")

    def test_rejects_empty_payload(self):
        with pytest.raises(ValueError):
            parse_data_uri("data:image/png;base64,")


class TestEncodeImage:
    """Tests for encode_image()."""

    def test_rejects_non_image_mime(self):
        with pytest.raises(ValueError):
            encode_image(b"text", "text/plain")
