from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .interpolation import InterpolationStrategy
from .pcm import samples_to_pcm16
from .requantize import requantize_samples
from .types import InvalidAudioInputError, PcmSampleBuffer, ResampleRequest

logger = logging.getLogger(__name__)


def compute_ratio(source_rate_hz: int, target_rate_hz: int) -> float:
    """Target/source rate ratio as a float; a non-positive source rate is rejected."""
    if source_rate_hz <= 0:
        raise InvalidAudioInputError(f"Source sample rate must be positive: {source_rate_hz}")
    if target_rate_hz <= 0:
        raise InvalidAudioInputError(f"Target sample rate must be positive: {target_rate_hz}")
    return target_rate_hz / float(source_rate_hz)


def compute_new_length(sample_count: int, source_rate_hz: int, target_rate_hz: int) -> int:
    """Output sample count, floor(sample_count * ratio)."""
    return int(sample_count * compute_ratio(source_rate_hz, target_rate_hz))


@dataclass(frozen=True)
class ResampleOutcome:
    """Diagnostic summary of one resampling pass."""

    source_rate_hz: int
    target_rate_hz: int
    ratio: float
    source_length: int
    output_length: int
    strategy: str
    bit_depth: int
    loop_before: Optional[tuple[int, int]] = None
    loop_after: Optional[tuple[int, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_rate_hz": self.source_rate_hz,
            "target_rate_hz": self.target_rate_hz,
            "ratio": self.ratio,
            "source_length": self.source_length,
            "output_length": self.output_length,
            "strategy": self.strategy,
            "bit_depth": self.bit_depth,
            "loop_before": self.loop_before,
            "loop_after": self.loop_after,
        }


class SampleResampler:
    """
    Stateless service that turns one PCM16 buffer into another at a new rate.

    All state (target rate, bit depth, strategy) is passed per call, so a
    single instance can be shared freely across samples.
    """

    def resample(
        self,
        source: PcmSampleBuffer,
        request: ResampleRequest,
        strategy: InterpolationStrategy,
    ) -> PcmSampleBuffer:
        result, _ = self.resample_with_outcome(source, request, strategy)
        return result

    def resample_with_outcome(
        self,
        source: PcmSampleBuffer,
        request: ResampleRequest,
        strategy: InterpolationStrategy,
    ) -> tuple[PcmSampleBuffer, ResampleOutcome]:
        """Resample and also return the diagnostic outcome."""
        ratio = compute_ratio(source.sample_rate_hz, request.target_sample_rate_hz)
        new_length = int(len(source) * ratio)

        output = strategy.interpolate_all(source, new_length, ratio)
        if request.requantizes and output.size:
            output = requantize_samples(output, request.target_bit_depth)

        loop = source.loop.scaled(ratio) if source.loop is not None else None
        result = PcmSampleBuffer(
            pcm=samples_to_pcm16(output),
            sample_rate_hz=request.target_sample_rate_hz,
            loop=loop,
        )

        outcome = ResampleOutcome(
            source_rate_hz=source.sample_rate_hz,
            target_rate_hz=request.target_sample_rate_hz,
            ratio=ratio,
            source_length=len(source),
            output_length=new_length,
            strategy=strategy.name,
            bit_depth=request.target_bit_depth,
            loop_before=(source.loop.start_sample, source.loop.end_sample) if source.loop else None,
            loop_after=(loop.start_sample, loop.end_sample) if loop else None,
        )
        logger.debug(
            "resample_complete strategy=%s ratio=%.6f source_len=%d output_len=%d bit_depth=%d",
            outcome.strategy,
            outcome.ratio,
            outcome.source_length,
            outcome.output_length,
            outcome.bit_depth,
        )
        return result, outcome


_default_resampler = SampleResampler()


def resample(
    source: PcmSampleBuffer,
    request: ResampleRequest,
    strategy: InterpolationStrategy,
) -> PcmSampleBuffer:
    """Resample with the module-level SampleResampler."""
    return _default_resampler.resample(source, request, strategy)
