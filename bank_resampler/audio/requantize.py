from __future__ import annotations

import numpy as np

from .types import INT16_MAX, INT16_MIN, MAX_BIT_DEPTH, InvalidAudioInputError

FULL_SCALE = 65535.0


def _steps(bits: int) -> int:
    if not 1 <= bits <= MAX_BIT_DEPTH:
        raise InvalidAudioInputError(f"Bit depth must be in [1, {MAX_BIT_DEPTH}]: {bits}")
    # 2**bits levels means 2**bits - 1 intervals across the full scale.
    return (1 << bits) - 1


def requantize(sample: int, bits: int) -> int:
    """
    Reduce the effective bit depth of one int16 sample, keeping 16-bit storage.

    The sample is normalized to [0, 1], snapped to one of 2**bits levels
    (round half to even) and expanded back, truncating toward zero.
    """
    steps = _steps(bits)
    normalized = (sample - INT16_MIN) / FULL_SCALE
    quantized = round(normalized * steps)
    value = int((quantized / steps) * FULL_SCALE + INT16_MIN)
    return max(INT16_MIN, min(INT16_MAX, value))


def requantize_samples(samples: np.ndarray, bits: int) -> np.ndarray:
    """Vectorized requantize over an int16 array."""
    steps = _steps(bits)
    normalized = (np.asarray(samples, dtype=np.float64) - INT16_MIN) / FULL_SCALE
    quantized = np.rint(normalized * steps)
    values = np.trunc((quantized / steps) * FULL_SCALE + INT16_MIN)
    return np.clip(values, INT16_MIN, INT16_MAX).astype(np.int16)
