from .models import InMemorySampleBank, SampleBank, SampleEntry, SweepFailure, SweepReport
from .sweep import BankSweep, sweep
from .wave_folder import WaveFolderBank, read_wave, write_wave

__all__ = [
    "InMemorySampleBank",
    "SampleBank",
    "SampleEntry",
    "SweepFailure",
    "SweepReport",
    "BankSweep",
    "sweep",
    "WaveFolderBank",
    "read_wave",
    "write_wave",
]
