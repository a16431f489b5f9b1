from .interpolation import (
    InterpolationMode,
    InterpolationStrategy,
    LinearInterpolation,
    LinearRounding,
    ZeroOrderHold,
    get_interpolation_strategy,
)
from .pcm import pcm16_to_samples, rms_pcm16, samples_to_pcm16
from .requantize import requantize, requantize_samples
from .resampler import ResampleOutcome, SampleResampler, compute_new_length, resample
from .types import (
    InvalidAudioInputError,
    LoopPoints,
    PcmSampleBuffer,
    ResampleRequest,
    UnsupportedAudioFormatError,
)

__all__ = [
    "InterpolationMode",
    "InterpolationStrategy",
    "LinearInterpolation",
    "LinearRounding",
    "ZeroOrderHold",
    "get_interpolation_strategy",
    "pcm16_to_samples",
    "rms_pcm16",
    "samples_to_pcm16",
    "requantize",
    "requantize_samples",
    "ResampleOutcome",
    "SampleResampler",
    "compute_new_length",
    "resample",
    "InvalidAudioInputError",
    "LoopPoints",
    "PcmSampleBuffer",
    "ResampleRequest",
    "UnsupportedAudioFormatError",
]
