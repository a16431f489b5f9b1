import numpy as np
import pytest

from bank_resampler.audio import InvalidAudioInputError, requantize, requantize_samples

FULL_RANGE = np.arange(-32768, 32768, dtype=np.int64)


def test_sixteen_bits_is_identity_within_one_lsb():
    out = requantize_samples(FULL_RANGE, 16)
    assert np.max(np.abs(out.astype(np.int64) - FULL_RANGE)) <= 1
    for sample in (-32768, -1, 0, 1, 12345, 32767):
        assert abs(requantize(sample, 16) - sample) <= 1


def test_one_bit_collapses_to_two_values():
    out = requantize_samples(FULL_RANGE, 1)
    assert sorted(set(out.tolist())) == [-32768, 32767]


def test_three_bits_yields_eight_levels():
    out = requantize_samples(FULL_RANGE, 3)
    assert len(np.unique(out)) == 8


def test_output_is_monotonic():
    out = requantize_samples(FULL_RANGE, 5).astype(np.int64)
    assert np.all(np.diff(out) >= 0)


def test_scalar_matches_vectorized():
    samples = np.array([-32768, -20000, -1, 0, 1, 777, 16384, 32767], dtype=np.int16)
    for bits in (1, 4, 8, 12):
        vector = requantize_samples(samples, bits).tolist()
        assert vector == [requantize(int(s), bits) for s in samples]


def test_extremes_are_preserved():
    for bits in range(1, 17):
        assert requantize(-32768, bits) == -32768
        assert requantize(32767, bits) == 32767


@pytest.mark.parametrize("bits", [0, 17, -3])
def test_bit_depth_out_of_range_is_rejected(bits):
    with pytest.raises(InvalidAudioInputError):
        requantize(0, bits)
    with pytest.raises(InvalidAudioInputError):
        requantize_samples(np.zeros(4, dtype=np.int16), bits)
