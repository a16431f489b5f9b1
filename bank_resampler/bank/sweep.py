"""Walk every sample of a bank and resample the ones that need it."""
from __future__ import annotations

import logging
from typing import Optional

from ..audio import (
    InterpolationStrategy,
    InvalidAudioInputError,
    ResampleRequest,
    SampleResampler,
    rms_pcm16,
)
from .models import SampleBank, SampleEntry, SweepFailure, SweepReport

logger = logging.getLogger(__name__)


class BankSweep:
    """
    Apply the resampler to a whole bank, one sample at a time.

    A sample is resampled when a bit-depth reduction is requested, or when
    its rate is below the target. Samples are visited in the bank's own
    order so the output is reproducible. A sample the resampler rejects is
    logged and reported and the sweep moves on, unless ``fail_fast`` is set.
    """

    def __init__(self, resampler: Optional[SampleResampler] = None, *, fail_fast: bool = False) -> None:
        self.resampler = resampler or SampleResampler()
        self.fail_fast = fail_fast

    @staticmethod
    def needs_resample(entry: SampleEntry, request: ResampleRequest) -> bool:
        return request.requantizes or entry.wave.sample_rate_hz < request.target_sample_rate_hz

    def sweep(
        self,
        bank: SampleBank,
        request: ResampleRequest,
        strategy: InterpolationStrategy,
    ) -> SweepReport:
        report = SweepReport()
        for entry in bank:
            if not self.needs_resample(entry, request):
                logger.debug(
                    "sample_skipped name=%s rate=%d target=%d",
                    entry.name,
                    entry.wave.sample_rate_hz,
                    request.target_sample_rate_hz,
                )
                report.skipped.append(entry.name)
                continue

            try:
                new_wave, outcome = self.resampler.resample_with_outcome(entry.wave, request, strategy)
            except InvalidAudioInputError as exc:
                if self.fail_fast:
                    raise
                logger.error("sample_failed name=%s reason=%s", entry.name, exc)
                report.failed.append(SweepFailure(name=entry.name, reason=str(exc)))
                continue

            entry.wave = new_wave
            report.resampled.append(entry.name)
            logger.info(
                "sample_resampled name=%s rate=%d->%d length=%d->%d strategy=%s bit_depth=%d",
                entry.name,
                outcome.source_rate_hz,
                outcome.target_rate_hz,
                outcome.source_length,
                outcome.output_length,
                outcome.strategy,
                outcome.bit_depth,
            )
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("sample_energy name=%s rms=%.1f", entry.name, rms_pcm16(new_wave.pcm))

        logger.info(
            "sweep_complete resampled=%d skipped=%d failed=%d",
            len(report.resampled),
            len(report.skipped),
            len(report.failed),
        )
        return report


def sweep(
    bank: SampleBank,
    request: ResampleRequest,
    strategy: InterpolationStrategy,
    *,
    fail_fast: bool = False,
) -> SweepReport:
    """Sweep a bank with a default BankSweep."""
    return BankSweep(fail_fast=fail_fast).sweep(bank, request, strategy)
