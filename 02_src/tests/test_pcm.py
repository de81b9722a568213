"""Tests for PCM decoding."""

import numpy as np
import pytest

from diagnostic.audio import decode_pcm16, to_wav_bytes


class TestDecodePcm16:
    """Tests for decode_pcm16()."""

    def test_normalizes_to_unit_range(self):
        data = np.array([0, 16384, -32768, 32767], dtype="<i2").tobytes()

        samples = decode_pcm16(data)

        assert samples.dtype == np.float32
        assert samples.shape == (4, 1)
        np.testing.assert_allclose(samples[:, 0], [0.0, 0.5, -1.0, 32767 / 32768.0])
        assert samples.min() >= -1.0
        assert samples.max() <= 1.0

    def test_trailing_odd_byte_is_dropped(self):
        data = np.array([100, -100], dtype="<i2").tobytes() + b"\x7f"

        samples = decode_pcm16(data)

        assert samples.shape == (2, 1)

    def test_interleaved_stereo(self):
        data = np.array([16384, -16384, 0, 32767], dtype="<i2").tobytes()

        samples = decode_pcm16(data, channels=2)

        assert samples.shape == (2, 2)
        np.testing.assert_allclose(samples[:, 0], [0.5, 0.0])
        np.testing.assert_allclose(samples[:, 1], [-0.5, 32767 / 32768.0])

    def test_empty_payload(self):
        assert decode_pcm16(b"").shape == (0, 1)

    def test_invalid_channel_count(self):
        with pytest.raises(ValueError):
            decode_pcm16(b"\x00\x00", channels=0)


class TestToWavBytes:
    """Tests for to_wav_bytes()."""

    def test_produces_riff_wave(self):
        samples = decode_pcm16(np.array([0, 1000, -1000], dtype="<i2").tobytes())

        wav = to_wav_bytes(samples, 24000)

        assert wav[:4] == b"RIFF"
        assert wav[8:12] == b"WAVE"
