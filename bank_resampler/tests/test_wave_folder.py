import wave

import pytest
import yaml

from bank_resampler.audio import (
    InvalidAudioInputError,
    LoopPoints,
    PcmSampleBuffer,
    ResampleRequest,
    UnsupportedAudioFormatError,
    ZeroOrderHold,
)
from bank_resampler.bank import BankSweep, SampleEntry, WaveFolderBank, read_wave, write_wave


def _write_bank(directory):
    write_wave(directory / "b_pad.wav", PcmSampleBuffer.from_samples(range(0, 400, 4), 22050))
    write_wave(directory / "a_kick.wav", PcmSampleBuffer.from_samples([0, 1000, -1000, 0], 8000))
    write_wave(directory / "c_hat.wav", PcmSampleBuffer.from_samples([3, 2, 1], 48000))
    with (directory / "bank.yaml").open("w", encoding="utf-8") as f:
        yaml.safe_dump({"samples": {"b_pad": {"loop_start": 10, "loop_end": 50}}}, f)


def test_load_reads_samples_in_name_order_with_loops(tmp_path):
    _write_bank(tmp_path)
    bank = WaveFolderBank.load(tmp_path)
    assert [entry.name for entry in bank] == ["a_kick", "b_pad", "c_hat"]
    pad = bank.samples[1].wave
    assert pad.sample_rate_hz == 22050
    assert len(pad) == 100
    assert pad.loop == LoopPoints(10, 50)
    assert bank.samples[0].wave.loop is None


def test_sweep_and_save_round_trip(tmp_path):
    src = tmp_path / "in"
    dst = tmp_path / "out"
    src.mkdir()
    _write_bank(src)

    bank = WaveFolderBank.load(src)
    report = BankSweep().sweep(bank, ResampleRequest(48000), ZeroOrderHold())
    bank.save(dst)

    assert report.resampled == ["a_kick", "b_pad"]
    reloaded = WaveFolderBank.load(dst)
    kick = reloaded.samples[0].wave
    assert kick.sample_rate_hz == 48000
    assert kick.samples().tolist() == [0] * 6 + [1000] * 6 + [-1000] * 6 + [0] * 6
    ratio = 48000 / 22050
    assert reloaded.samples[1].wave.loop == LoopPoints(int(10 * ratio), int(50 * ratio))
    assert reloaded.samples[2].wave.samples().tolist() == [3, 2, 1]


def test_stereo_wave_is_rejected(tmp_path):
    path = tmp_path / "stereo.wav"
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(2)
        wf.setsampwidth(2)
        wf.setframerate(22050)
        wf.writeframes(b"\x00\x00" * 8)
    with pytest.raises(UnsupportedAudioFormatError):
        read_wave(path)


def test_eight_bit_wave_is_rejected(tmp_path):
    path = tmp_path / "eight.wav"
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(1)
        wf.setframerate(22050)
        wf.writeframes(b"\x80" * 8)
    with pytest.raises(UnsupportedAudioFormatError):
        read_wave(path)


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        WaveFolderBank.load(tmp_path / "nope")


def test_saving_a_loopless_bank_removes_the_old_manifest(tmp_path):
    out = tmp_path / "out"
    pad = PcmSampleBuffer.from_samples(range(100), 22050, loop=LoopPoints(10, 90))
    WaveFolderBank([SampleEntry("pad", pad)]).save(out)
    assert (out / "bank.yaml").is_file()

    shorter = PcmSampleBuffer.from_samples(range(20), 22050)
    WaveFolderBank([SampleEntry("pad", shorter)]).save(out)

    assert not (out / "bank.yaml").exists()
    reloaded = WaveFolderBank.load(out)
    assert len(reloaded.samples[0].wave) == 20
    assert reloaded.samples[0].wave.loop is None


def test_second_save_replaces_loops(tmp_path):
    pad = PcmSampleBuffer.from_samples(range(100), 22050)
    WaveFolderBank([SampleEntry("pad", pad.with_loop(LoopPoints(10, 90)))]).save(tmp_path)
    WaveFolderBank([SampleEntry("pad", pad.with_loop(LoopPoints(5, 15)))]).save(tmp_path)
    assert WaveFolderBank.load(tmp_path).samples[0].wave.loop == LoopPoints(5, 15)


def test_loop_past_the_end_is_dropped_for_that_sample_only(tmp_path):
    _write_bank(tmp_path)
    with (tmp_path / "bank.yaml").open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            {
                "samples": {
                    "a_kick": {"loop_start": 0, "loop_end": 50},
                    "b_pad": {"loop_start": 10, "loop_end": 50},
                    "c_hat": {"loop_start": "x", "loop_end": 2},
                }
            },
            f,
        )

    bank = WaveFolderBank.load(tmp_path)

    assert [entry.wave.loop for entry in bank] == [None, LoopPoints(10, 50), None]


def test_malformed_manifest_is_rejected(tmp_path):
    _write_bank(tmp_path)
    (tmp_path / "bank.yaml").write_text("samples: [unclosed\n", encoding="utf-8")
    with pytest.raises(InvalidAudioInputError):
        WaveFolderBank.load(tmp_path)


def test_empty_manifest_means_no_loops(tmp_path):
    _write_bank(tmp_path)
    (tmp_path / "bank.yaml").write_text("", encoding="utf-8")
    assert all(entry.wave.loop is None for entry in WaveFolderBank.load(tmp_path))
