from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Protocol

from ..audio import PcmSampleBuffer


@dataclass
class SampleEntry:
    """One named sample of a bank; ``wave`` is replaced, never mutated."""

    name: str
    wave: PcmSampleBuffer


class SampleBank(Protocol):
    """Anything that yields its sample entries in stored order."""

    def __iter__(self) -> Iterator[SampleEntry]:  # pragma: no cover - interface
        ...


@dataclass
class InMemorySampleBank:
    samples: List[SampleEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[SampleEntry]:
        return iter(self.samples)

    def __len__(self) -> int:
        return len(self.samples)

    def add(self, name: str, wave: PcmSampleBuffer) -> SampleEntry:
        entry = SampleEntry(name=name, wave=wave)
        self.samples.append(entry)
        return entry

    def get(self, name: str) -> Optional[SampleEntry]:
        for entry in self.samples:
            if entry.name == name:
                return entry
        return None


@dataclass
class SweepFailure:
    name: str
    reason: str


@dataclass
class SweepReport:
    """What a sweep did to each sample, in bank order."""

    resampled: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[SweepFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resampled": list(self.resampled),
            "skipped": list(self.skipped),
            "failed": [{"name": f.name, "reason": f.reason} for f in self.failed],
        }
