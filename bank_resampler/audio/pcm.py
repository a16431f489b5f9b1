from __future__ import annotations

import numpy as np

from .types import INT16_MAX, INT16_MIN, PCM16_SAMPLE_WIDTH, InvalidAudioInputError


def trim_to_frame_boundary(pcm: bytes, channels: int = 1) -> bytes:
    """Trim trailing bytes so len(pcm) is a multiple of the PCM16 frame size."""
    frame_bytes = PCM16_SAMPLE_WIDTH * channels
    remainder = len(pcm) % frame_bytes
    if remainder == 0:
        return pcm
    return pcm[: len(pcm) - remainder]


def pcm16_to_samples(pcm: bytes) -> np.ndarray:
    """Decode little-endian PCM16 bytes into an int16 array."""
    if len(pcm) % PCM16_SAMPLE_WIDTH != 0:
        raise InvalidAudioInputError(f"PCM16 buffer has an odd byte count: {len(pcm)}")
    return np.frombuffer(pcm, dtype="<i2")


def samples_to_pcm16(samples: np.ndarray) -> bytes:
    """
    Encode samples as little-endian PCM16 bytes.

    Float input is truncated toward zero, then everything is saturated to the
    int16 range so an out-of-range value never wraps around.
    """
    arr = np.asarray(samples)
    if arr.dtype.kind == "f":
        arr = np.trunc(arr)
    clipped = np.clip(arr, INT16_MIN, INT16_MAX)
    return clipped.astype("<i2").tobytes()


def rms_pcm16(pcm: bytes) -> float:
    """Compute RMS energy of mono PCM16 (used for sweep diagnostics)."""
    trimmed = trim_to_frame_boundary(pcm)
    if not trimmed:
        return 0.0
    samples = pcm16_to_samples(trimmed).astype(np.float64)
    return float(np.sqrt(np.mean(samples * samples)))
