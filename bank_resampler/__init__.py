"""Upsample the PCM16 samples of a sound bank to a uniform rate and bit depth."""

from .audio import (
    InterpolationStrategy,
    LinearInterpolation,
    LoopPoints,
    PcmSampleBuffer,
    ResampleRequest,
    SampleResampler,
    ZeroOrderHold,
    get_interpolation_strategy,
    resample,
)
from .bank import BankSweep, SampleEntry, SweepReport, sweep

__version__ = "0.1.0"

__all__ = [
    "InterpolationStrategy",
    "LinearInterpolation",
    "LoopPoints",
    "PcmSampleBuffer",
    "ResampleRequest",
    "SampleResampler",
    "ZeroOrderHold",
    "get_interpolation_strategy",
    "resample",
    "BankSweep",
    "SampleEntry",
    "SweepReport",
    "sweep",
]
