from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .audio import (
    InterpolationStrategy,
    InvalidAudioInputError,
    LinearRounding,
    ResampleRequest,
    get_interpolation_strategy,
)
from .audio.interpolation import InterpolationMode
from .audio.types import DEFAULT_TARGET_SAMPLE_RATE_HZ, MAX_BIT_DEPTH
from .utils.dict_utils import deep_merge
from .utils.env_config import ENV_PREFIX, EnvConfigError, apply_env_overrides

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""


@dataclass
class SystemConfig:
    log_level: str = "INFO"

    def to_dict(self) -> Dict:
        return {"log_level": self.log_level}


@dataclass
class ResampleConfig:
    target_sample_rate_hz: int = DEFAULT_TARGET_SAMPLE_RATE_HZ
    target_bit_depth: int = MAX_BIT_DEPTH
    interpolation: str = InterpolationMode.ZERO_ORDER_HOLD.value
    linear_rounding: str = LinearRounding.TRUNCATE.value

    def to_dict(self) -> Dict:
        return {
            "target_sample_rate_hz": self.target_sample_rate_hz,
            "target_bit_depth": self.target_bit_depth,
            "interpolation": self.interpolation,
            "linear_rounding": self.linear_rounding,
        }


@dataclass
class SweepConfig:
    fail_fast: bool = False

    def to_dict(self) -> Dict:
        return {"fail_fast": self.fail_fast}


@dataclass
class Config:
    system: SystemConfig = field(default_factory=SystemConfig)
    resample: ResampleConfig = field(default_factory=ResampleConfig)
    sweep: SweepConfig = field(default_factory=SweepConfig)

    def to_dict(self) -> Dict:
        return {
            "system": self.system.to_dict(),
            "resample": self.resample.to_dict(),
            "sweep": self.sweep.to_dict(),
        }

    def to_request(self) -> ResampleRequest:
        try:
            return ResampleRequest(
                target_sample_rate_hz=int(self.resample.target_sample_rate_hz),
                target_bit_depth=int(self.resample.target_bit_depth),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid resample settings: {exc}") from exc

    def to_strategy(self) -> InterpolationStrategy:
        try:
            return get_interpolation_strategy(
                self.resample.interpolation,
                linear_rounding=self.resample.linear_rounding,
            )
        except InvalidAudioInputError as exc:
            raise ConfigError(str(exc)) from exc

    @classmethod
    def load(cls, paths: Optional[List[Path]] = None, *, env_prefix: str = ENV_PREFIX) -> "Config":
        """Merge YAML files over the defaults, then apply environment overrides."""
        merged = cls._merged_yaml_dict(paths or [])
        try:
            merged = apply_env_overrides(merged, prefix=env_prefix)
        except EnvConfigError as exc:
            raise ConfigError(str(exc)) from exc
        return cls.from_dict(merged)

    @classmethod
    def from_yaml(cls, paths: List[Path]) -> "Config":
        """Load and merge multiple YAML config files.

        Configs are merged left-to-right, with later configs overriding earlier ones.
        Paths that do not exist are logged and ignored.
        """
        return cls.from_dict(cls._merged_yaml_dict(paths))

    @classmethod
    def _merged_yaml_dict(cls, paths: List[Path]) -> Dict[str, Any]:
        valid_paths = []
        for path in paths:
            if Path(path).is_file():
                valid_paths.append(Path(path))
            else:
                logger.warning("Config path does not exist or is not a file: %s", path)

        if not valid_paths:
            logger.debug("No config files given, using defaults")

        layers = []
        for path in valid_paths:
            with path.open("r", encoding="utf-8") as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as exc:
                    raise ConfigError(f"Cannot parse config file {path}: {exc}") from exc
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {path} must contain a mapping")
            layers.append(data)
        return deep_merge(DEFAULT_CONFIG.to_dict(), *layers)

    @classmethod
    def from_dict(cls, data: Dict) -> "Config":
        system = data.get("system") or {}
        resample = data.get("resample") or {}
        sweep = data.get("sweep") or {}
        try:
            return cls(
                system=SystemConfig(**system),
                resample=ResampleConfig(**resample),
                sweep=SweepConfig(**sweep),
            )
        except TypeError as exc:
            raise ConfigError(f"Unknown configuration key: {exc}") from exc


DEFAULT_CONFIG = Config()
