from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Union

import numpy as np

INT16_MIN = -32768
INT16_MAX = 32767
PCM16_SAMPLE_WIDTH = 2
DEFAULT_TARGET_SAMPLE_RATE_HZ = 48_000
MAX_BIT_DEPTH = 16


class InvalidAudioInputError(ValueError):
    """Raised when a caller hands the resampler input it cannot work with."""


class UnsupportedAudioFormatError(ValueError):
    """Raised when audio is not in a supported format (expected mono PCM16)."""


@dataclass(frozen=True)
class LoopPoints:
    """Sample-index bounds of a playback loop."""

    start_sample: int
    end_sample: int

    def __post_init__(self) -> None:
        if self.start_sample < 0 or self.end_sample < self.start_sample:
            raise InvalidAudioInputError(
                f"Invalid loop bounds: start={self.start_sample} end={self.end_sample}"
            )

    def length(self) -> int:
        return self.end_sample - self.start_sample

    def scaled(self, ratio: float) -> "LoopPoints":
        """Rescale both bounds by ratio, each truncated toward zero on its own.

        The loop length is therefore not guaranteed to scale by exactly ratio.
        """
        return LoopPoints(int(self.start_sample * ratio), int(self.end_sample * ratio))


@dataclass(frozen=True)
class PcmSampleBuffer:
    """Mono signed 16-bit little-endian PCM plus its rate and optional loop."""

    pcm: bytes
    sample_rate_hz: int
    loop: Optional[LoopPoints] = None

    def __post_init__(self) -> None:
        if len(self.pcm) % PCM16_SAMPLE_WIDTH != 0:
            raise InvalidAudioInputError(
                f"PCM16 buffer has an odd byte count: {len(self.pcm)}"
            )
        if self.loop is not None and self.loop.end_sample > len(self):
            raise InvalidAudioInputError(
                f"Loop end {self.loop.end_sample} exceeds sample count {len(self)}"
            )

    @classmethod
    def from_samples(
        cls,
        samples: Union[Iterable[int], np.ndarray],
        sample_rate_hz: int,
        loop: Optional[LoopPoints] = None,
    ) -> "PcmSampleBuffer":
        """Build a buffer from int16-range integers."""
        arr = samples if isinstance(samples, np.ndarray) else np.asarray(list(samples), dtype=np.int64)
        if arr.size and (arr.min() < INT16_MIN or arr.max() > INT16_MAX):
            raise InvalidAudioInputError("Sample values must fit in signed 16-bit range")
        return cls(arr.astype("<i2").tobytes(), sample_rate_hz, loop)

    def __len__(self) -> int:
        return len(self.pcm) // PCM16_SAMPLE_WIDTH

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < len(self):
            raise IndexError(f"Sample index {index} out of range [0, {len(self)})")
        offset = index * PCM16_SAMPLE_WIDTH
        return int.from_bytes(self.pcm[offset:offset + PCM16_SAMPLE_WIDTH], "little", signed=True)

    def samples(self) -> np.ndarray:
        """Read-only int16 view over the PCM bytes."""
        return np.frombuffer(self.pcm, dtype="<i2")

    def with_loop(self, loop: Optional[LoopPoints]) -> "PcmSampleBuffer":
        return replace(self, loop=loop)

    def duration_ms(self) -> int:
        """Duration in milliseconds based on sample count and rate."""
        if not self.pcm or self.sample_rate_hz <= 0:
            return 0
        return int((len(self) / self.sample_rate_hz) * 1000)


@dataclass(frozen=True)
class ResampleRequest:
    """Target parameters for one resampling pass."""

    target_sample_rate_hz: int = DEFAULT_TARGET_SAMPLE_RATE_HZ
    target_bit_depth: int = MAX_BIT_DEPTH

    def __post_init__(self) -> None:
        if self.target_sample_rate_hz <= 0:
            raise InvalidAudioInputError(
                f"Target sample rate must be positive: {self.target_sample_rate_hz}"
            )
        if not 1 <= self.target_bit_depth <= MAX_BIT_DEPTH:
            raise InvalidAudioInputError(
                f"Target bit depth must be in [1, {MAX_BIT_DEPTH}]: {self.target_bit_depth}"
            )

    @property
    def requantizes(self) -> bool:
        return self.target_bit_depth < MAX_BIT_DEPTH
