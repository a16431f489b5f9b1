from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


def deep_merge(base: Mapping[str, Any], *overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge config layers left to right into a new dict.

    Nested mappings are merged key by key; any other value, lists included,
    replaces what the earlier layer had. ``None`` layers are skipped and no
    input mapping is modified.
    """
    merged: Dict[str, Any] = {
        key: deep_merge(value) if isinstance(value, Mapping) else value for key, value in base.items()
    }
    for layer in overrides:
        for key, value in (layer or {}).items():
            earlier = merged.get(key)
            if isinstance(value, Mapping) and isinstance(earlier, Mapping):
                merged[key] = deep_merge(earlier, value)
            elif isinstance(value, Mapping):
                merged[key] = deep_merge(value)
            else:
                merged[key] = value
    return merged
