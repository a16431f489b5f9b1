"""A minimal sound-bank container: a folder of mono PCM16 WAV files.

Loop points live in an optional ``bank.yaml`` manifest next to the WAVs::

    samples:
      pad:
        loop_start: 1200
        loop_end: 8800
"""
from __future__ import annotations

import logging
import wave
from pathlib import Path
from typing import Any, Dict, Iterator, List

import yaml

from ..audio import InvalidAudioInputError, LoopPoints, PcmSampleBuffer, UnsupportedAudioFormatError
from ..audio.pcm import trim_to_frame_boundary
from ..audio.types import PCM16_SAMPLE_WIDTH
from .models import SampleEntry

logger = logging.getLogger(__name__)

MANIFEST_NAME = "bank.yaml"


class WaveFolderBank:
    """Sample bank backed by ``<name>.wav`` files, visited in name order."""

    def __init__(self, samples: List[SampleEntry] | None = None) -> None:
        self.samples: List[SampleEntry] = samples or []

    def __iter__(self) -> Iterator[SampleEntry]:
        return iter(self.samples)

    def __len__(self) -> int:
        return len(self.samples)

    @classmethod
    def load(cls, directory: Path) -> "WaveFolderBank":
        directory = Path(directory)
        if not directory.is_dir():
            raise FileNotFoundError(f"Bank directory not found: {directory}")

        loops = _read_manifest(directory / MANIFEST_NAME)
        samples: List[SampleEntry] = []
        for path in sorted(directory.glob("*.wav")):
            wave_buffer = read_wave(path)
            loop = loops.get(path.stem)
            if loop is not None:
                try:
                    wave_buffer = wave_buffer.with_loop(loop)
                except InvalidAudioInputError as exc:
                    logger.warning("loop_dropped name=%s reason=%s", path.stem, exc)
            samples.append(SampleEntry(name=path.stem, wave=wave_buffer))
        logger.info("bank_loaded path=%s samples=%d", directory, len(samples))
        return cls(samples)

    def save(self, directory: Path) -> None:
        """Write every entry as a WAV and replace the loop manifest.

        A stale ``bank.yaml`` is removed when no entry has a loop, so loops
        from an earlier save never attach to the new waves.
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        manifest: Dict[str, Dict[str, int]] = {}
        for entry in self.samples:
            write_wave(directory / f"{entry.name}.wav", entry.wave)
            if entry.wave.loop is not None:
                manifest[entry.name] = {
                    "loop_start": entry.wave.loop.start_sample,
                    "loop_end": entry.wave.loop.end_sample,
                }
        manifest_path = directory / MANIFEST_NAME
        if manifest:
            with manifest_path.open("w", encoding="utf-8") as f:
                yaml.safe_dump({"samples": manifest}, f, sort_keys=True)
        else:
            manifest_path.unlink(missing_ok=True)
        logger.info("bank_saved path=%s samples=%d", directory, len(self.samples))


def read_wave(path: Path, loop: LoopPoints | None = None) -> PcmSampleBuffer:
    """Read a mono 16-bit WAV into a PcmSampleBuffer."""
    with wave.open(str(path), "rb") as wf:
        channels = wf.getnchannels()
        sample_width = wf.getsampwidth()
        if channels != 1:
            raise UnsupportedAudioFormatError(f"{path.name}: expected mono, got {channels} channels")
        if sample_width != PCM16_SAMPLE_WIDTH:
            raise UnsupportedAudioFormatError(
                f"{path.name}: expected 16-bit PCM, got {sample_width * 8}-bit"
            )
        frames = wf.readframes(wf.getnframes())
        sample_rate = wf.getframerate()
    return PcmSampleBuffer(pcm=trim_to_frame_boundary(frames), sample_rate_hz=sample_rate, loop=loop)


def write_wave(path: Path, buffer: PcmSampleBuffer) -> None:
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(PCM16_SAMPLE_WIDTH)
        wf.setframerate(buffer.sample_rate_hz)
        wf.writeframes(buffer.pcm)


def _read_manifest(path: Path) -> Dict[str, LoopPoints]:
    """Loop points per sample name; entries that are not valid loops are dropped."""
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            raw: Any = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InvalidAudioInputError(f"Cannot parse {path.name}: {exc}") from exc
    entries = (raw.get("samples") or {}) if isinstance(raw, dict) else None
    if not isinstance(entries, dict):
        raise InvalidAudioInputError(f"{path.name} must contain a 'samples' mapping")

    loops: Dict[str, LoopPoints] = {}
    for name, data in entries.items():
        if not isinstance(data, dict) or "loop_start" not in data or "loop_end" not in data:
            continue
        try:
            loops[str(name)] = LoopPoints(int(data["loop_start"]), int(data["loop_end"]))
        except (TypeError, ValueError) as exc:
            logger.warning("loop_dropped name=%s reason=%s", name, exc)
    return loops
