"""Environment variable overrides for resampler configuration.

Every scalar in the config tree can be overridden by ``BANKRS_{PATH}``,
path components joined by underscores, all UPPERCASE:

    BANKRS_SYSTEM_LOG_LEVEL=DEBUG
    BANKRS_RESAMPLE_TARGET_SAMPLE_RATE_HZ=44100
    BANKRS_SWEEP_FAIL_FAST=true

The override takes the type of the value it replaces, so a YAML ``48000``
can only be replaced by something that parses as an integer.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, Iterator, Mapping, Tuple

logger = logging.getLogger(__name__)

ENV_PREFIX = "BANKRS"

_BOOLEANS = {
    "true": True,
    "yes": True,
    "1": True,
    "on": True,
    "false": False,
    "no": False,
    "0": False,
    "off": False,
}
_NULLS = ("", "null", "none")


class EnvConfigError(Exception):
    """Raised when an environment override cannot be applied."""


def _parse_bool(value: str) -> bool:
    try:
        return _BOOLEANS[value.lower()]
    except KeyError as exc:
        raise EnvConfigError(
            f"Cannot parse '{value}' as boolean. Valid values: true/false, yes/no, 1/0, on/off"
        ) from exc


def _numeric_parser(kind: type, label: str) -> Callable[[str], Any]:
    def parse(value: str) -> Any:
        try:
            return kind(value)
        except ValueError as exc:
            raise EnvConfigError(f"Cannot parse '{value}' as {label}") from exc

    return parse


# bool must be looked up by exact type, it is a subclass of int
_PARSERS: Dict[type, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: _numeric_parser(int, "integer"),
    float: _numeric_parser(float, "float"),
}


def parse_env_value(value: str, existing_value: Any) -> Any:
    """Parse an environment string into the type of the value it replaces.

    Examples:
        >>> parse_env_value("on", False)
        True
        >>> parse_env_value("22050", 48000)
        22050
    """
    if value.lower() in _NULLS:
        return None
    parser = _PARSERS.get(type(existing_value))
    return parser(value) if parser else value


def env_var_name(path: Tuple[str, ...], prefix: str = ENV_PREFIX) -> str:
    """``("resample", "target_bit_depth")`` -> ``BANKRS_RESAMPLE_TARGET_BIT_DEPTH``."""
    return "_".join(str(part) for part in (prefix,) + path).upper()


def _scalar_leaves(tree: Mapping[str, Any], path: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], Any]]:
    for key, value in tree.items():
        if isinstance(value, list):
            continue
        if isinstance(value, Mapping):
            yield from _scalar_leaves(value, path + (key,))
        else:
            yield path + (key,), value


def _copy_tree(tree: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _copy_tree(v) if isinstance(v, Mapping) else v for k, v in tree.items()}


def apply_env_overrides(config_dict: Mapping[str, Any], prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    """Return a copy of config_dict with matching environment variables applied.

    Raises:
        EnvConfigError: If an environment value cannot be parsed
    """
    result = _copy_tree(config_dict)
    for path, current in list(_scalar_leaves(result)):
        name = env_var_name(path, prefix)
        raw = os.environ.get(name)
        if raw is None:
            continue
        try:
            parsed = parse_env_value(raw, current)
        except EnvConfigError as exc:
            raise EnvConfigError(f"Failed to parse environment variable {name}: {exc}") from exc

        node = result
        for key in path[:-1]:
            node = node[key]
        node[path[-1]] = parsed
        logger.info(
            "config_override_from_env var=%s value_type=%s path=%s",
            name,
            type(parsed).__name__,
            ".".join(path),
        )
    return result


__all__ = ["apply_env_overrides", "env_var_name", "parse_env_value", "EnvConfigError", "ENV_PREFIX"]
