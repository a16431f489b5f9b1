"""Interpolation strategies used to fill each output sample of a resampled buffer.

Each strategy maps an output index back to a fractional position in the source
(``output_index / ratio``) and derives one int16 value from one or two source
samples. Both the per-index ``interpolate`` and the whole-buffer
``interpolate_all`` must agree value for value; the resampler uses the latter.

Positions are always clamped to ``[0, len(source) - 1]`` so the last output
indices never read past the end of the source.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum

import numpy as np

from .types import INT16_MAX, INT16_MIN, InvalidAudioInputError, PcmSampleBuffer

logger = logging.getLogger(__name__)


class InterpolationMode(str, Enum):
    """Supported interpolation algorithms."""

    ZERO_ORDER_HOLD = "zero_order_hold"
    LINEAR = "linear"


class LinearRounding(str, Enum):
    """How the linear blend is narrowed back to int16.

    TRUNCATE matches the legacy narrowing cast (fraction dropped toward zero,
    so negative blends are biased toward zero). NEAREST rounds half to even.
    """

    TRUNCATE = "truncate"
    NEAREST = "nearest"


class InterpolationStrategy(ABC):
    """Maps an output sample index to a value derived from the source buffer."""

    mode: InterpolationMode

    @property
    def name(self) -> str:
        return self.mode.value

    @abstractmethod
    def interpolate(self, source: PcmSampleBuffer, output_index: int, ratio: float) -> int:
        """Return the int16 value for a single output index."""

    @abstractmethod
    def interpolate_all(self, source: PcmSampleBuffer, new_length: int, ratio: float) -> np.ndarray:
        """Return all ``new_length`` output samples as an int16 array."""

    @staticmethod
    def _check(source: PcmSampleBuffer, ratio: float) -> None:
        if ratio <= 0:
            raise InvalidAudioInputError(f"Resampling ratio must be positive: {ratio}")
        if len(source) == 0:
            raise InvalidAudioInputError("Cannot interpolate from an empty source buffer")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ZeroOrderHold(InterpolationStrategy):
    """Repeats the nearest preceding source sample, bit-exact, no smoothing."""

    mode = InterpolationMode.ZERO_ORDER_HOLD

    def interpolate(self, source: PcmSampleBuffer, output_index: int, ratio: float) -> int:
        self._check(source, ratio)
        source_index = min(int(output_index / ratio), len(source) - 1)
        return source[source_index]

    def interpolate_all(self, source: PcmSampleBuffer, new_length: int, ratio: float) -> np.ndarray:
        if new_length <= 0:
            return np.empty(0, dtype=np.int16)
        self._check(source, ratio)
        samples = source.samples()
        positions = np.arange(new_length, dtype=np.float64) / ratio
        indices = np.minimum(positions.astype(np.int64), len(samples) - 1)
        return samples[indices].astype(np.int16)


class LinearInterpolation(InterpolationStrategy):
    """Blends the two source samples around the fractional source position."""

    mode = InterpolationMode.LINEAR

    def __init__(self, rounding: LinearRounding = LinearRounding.TRUNCATE) -> None:
        self.rounding = LinearRounding(rounding)

    def interpolate(self, source: PcmSampleBuffer, output_index: int, ratio: float) -> int:
        self._check(source, ratio)
        last = len(source) - 1
        exact = output_index / ratio
        i1 = min(int(exact), last)
        i2 = min(i1 + 1, last)
        fraction = exact - i1
        s1 = source[i1]
        s2 = source[i2]
        value = s1 + (s2 - s1) * fraction
        if self.rounding is LinearRounding.NEAREST:
            narrowed = round(value)
        else:
            narrowed = int(value)
        return max(INT16_MIN, min(INT16_MAX, narrowed))

    def interpolate_all(self, source: PcmSampleBuffer, new_length: int, ratio: float) -> np.ndarray:
        if new_length <= 0:
            return np.empty(0, dtype=np.int16)
        self._check(source, ratio)
        samples = source.samples().astype(np.int64)
        last = len(samples) - 1
        exact = np.arange(new_length, dtype=np.float64) / ratio
        i1 = np.minimum(exact.astype(np.int64), last)
        i2 = np.minimum(i1 + 1, last)
        fraction = exact - i1
        s1 = samples[i1]
        values = s1 + (samples[i2] - s1) * fraction
        if self.rounding is LinearRounding.NEAREST:
            values = np.rint(values)
        else:
            values = np.trunc(values)
        return np.clip(values, INT16_MIN, INT16_MAX).astype(np.int16)

    def __repr__(self) -> str:
        return f"LinearInterpolation(rounding={self.rounding.value!r})"


_MODE_ALIASES = {
    "zero_order_hold": InterpolationMode.ZERO_ORDER_HOLD,
    "zero-order-hold": InterpolationMode.ZERO_ORDER_HOLD,
    "zoh": InterpolationMode.ZERO_ORDER_HOLD,
    "hold": InterpolationMode.ZERO_ORDER_HOLD,
    "linear": InterpolationMode.LINEAR,
    "lerp": InterpolationMode.LINEAR,
}


def resolve_interpolation_mode(name: str | InterpolationMode | None) -> InterpolationMode:
    """Normalize a user-facing algorithm name to an InterpolationMode."""
    if isinstance(name, InterpolationMode):
        return name
    if name is not None and not isinstance(name, str):
        raise InvalidAudioInputError(f"Interpolation mode must be a string, got {name!r}")
    normalized = (name or "").strip().lower()
    try:
        return _MODE_ALIASES[normalized]
    except KeyError as exc:
        raise InvalidAudioInputError(f"Unknown interpolation mode: {name!r}") from exc


def get_interpolation_strategy(
    name: str | InterpolationMode | None,
    *,
    linear_rounding: str | LinearRounding = LinearRounding.TRUNCATE,
) -> InterpolationStrategy:
    """Create the interpolation strategy for a mode name."""
    mode = resolve_interpolation_mode(name)
    if mode is InterpolationMode.LINEAR:
        try:
            rounding = LinearRounding(linear_rounding)
        except ValueError as exc:
            raise InvalidAudioInputError(f"Unknown linear rounding: {linear_rounding!r}") from exc
        logger.debug("interpolation_selected mode=%s rounding=%s", mode.value, rounding.value)
        return LinearInterpolation(rounding)
    logger.debug("interpolation_selected mode=%s", mode.value)
    return ZeroOrderHold()
