"""Unit tests for config layer merging."""

from .dict_utils import deep_merge


def test_later_layers_win():
    base = {"resample": {"target_sample_rate_hz": 48000, "interpolation": "zero_order_hold"}}
    merged = deep_merge(
        base,
        {"resample": {"target_sample_rate_hz": 44100}},
        {"resample": {"target_sample_rate_hz": 32000}, "sweep": {"fail_fast": True}},
    )
    assert merged == {
        "resample": {"target_sample_rate_hz": 32000, "interpolation": "zero_order_hold"},
        "sweep": {"fail_fast": True},
    }


def test_lists_are_replaced_and_none_layers_skipped():
    merged = deep_merge({"only": ["kick", "pad"]}, None, {"only": ["hat"]})
    assert merged == {"only": ["hat"]}


def test_inputs_are_not_modified():
    base = {"resample": {"target_bit_depth": 16}}
    layer = {"resample": {"target_bit_depth": 8}}
    merged = deep_merge(base, layer)
    merged["resample"]["target_bit_depth"] = 4
    assert base == {"resample": {"target_bit_depth": 16}}
    assert layer == {"resample": {"target_bit_depth": 8}}
