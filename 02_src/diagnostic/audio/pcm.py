"""PCM decoding and WAV encoding."""

import io

import numpy as np
import soundfile as sf


def decode_pcm16(data: bytes, channels: int = 1) -> np.ndarray:
    """Decode little-endian 16-bit PCM into float32 samples in [-1.0, 1.0].

    Returns an array of shape (frames, channels). Incomplete trailing
    samples or frames are dropped.
    """
    if channels < 1:
        raise ValueError("channels must be >= 1")

    usable = len(data) - (len(data) % 2)
    samples = np.frombuffer(data[:usable], dtype="<i2")

    frames = len(samples) // channels
    samples = samples[: frames * channels].reshape(frames, channels)
    return samples.astype(np.float32) / 32768.0


def duration_seconds(samples: np.ndarray, sample_rate: int) -> float:
    return len(samples) / float(sample_rate)


def to_wav_bytes(samples: np.ndarray, sample_rate: int) -> bytes:
    """Encode float samples as a 16-bit PCM WAV file."""
    buf = io.BytesIO()
    sf.write(buf, samples, sample_rate, format="WAV", subtype="PCM_16")
    return buf.getvalue()
