"""Command-line interface for resampling a folder-backed sound bank."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.traceback import install as install_rich_traceback

from .audio import InvalidAudioInputError, UnsupportedAudioFormatError
from .bank import BankSweep, WaveFolderBank
from .config import Config, ConfigError
from .utils.logging_setup import configure_logging

install_rich_traceback(suppress=[typer])

app = typer.Typer(
    help="Upsample every sample of a sound bank to a uniform rate and bit depth.",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def _load_config(
    config_paths: Optional[List[Path]],
    *,
    target_rate: Optional[int] = None,
    bit_depth: Optional[int] = None,
    interpolation: Optional[str] = None,
    linear_rounding: Optional[str] = None,
    fail_fast: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> Config:
    """Load config files and layer explicit command-line options on top."""
    try:
        config = Config.load(config_paths or [])
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if target_rate is not None:
        config.resample.target_sample_rate_hz = target_rate
    if bit_depth is not None:
        config.resample.target_bit_depth = bit_depth
    if interpolation is not None:
        config.resample.interpolation = interpolation
    if linear_rounding is not None:
        config.resample.linear_rounding = linear_rounding
    if fail_fast is not None:
        config.sweep.fail_fast = fail_fast
    if log_level is not None:
        config.system.log_level = log_level
    return config


def _load_bank(directory: Path) -> WaveFolderBank:
    try:
        return WaveFolderBank.load(directory)
    except (FileNotFoundError, UnsupportedAudioFormatError, InvalidAudioInputError) as exc:
        console.print(f"[red]Cannot load bank:[/red] {exc}")
        raise typer.Exit(code=2) from exc


@app.command()
def sweep(
    input_dir: Path = typer.Argument(..., help="Folder of mono PCM16 WAV samples"),
    output_dir: Path = typer.Argument(..., help="Where the resampled bank is written"),
    config: Optional[List[Path]] = typer.Option(
        None, "--config", "-c", help="YAML config file (can be given several times, merged in order)"
    ),
    target_rate: Optional[int] = typer.Option(None, "--target-rate", "-r", help="Target sample rate in Hz"),
    bit_depth: Optional[int] = typer.Option(None, "--bit-depth", "-b", help="Effective bit depth 1-16"),
    interpolation: Optional[str] = typer.Option(
        None, "--interpolation", "-i", help="zero_order_hold | linear"
    ),
    linear_rounding: Optional[str] = typer.Option(
        None, "--linear-rounding", help="truncate (legacy) | nearest"
    ),
    fail_fast: Optional[bool] = typer.Option(
        None, "--fail-fast/--keep-going", help="Abort on the first sample that cannot be resampled"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Resample every sample of INPUT_DIR and write the result to OUTPUT_DIR."""
    cfg = _load_config(
        config,
        target_rate=target_rate,
        bit_depth=bit_depth,
        interpolation=interpolation,
        linear_rounding=linear_rounding,
        fail_fast=fail_fast,
        log_level=log_level,
    )
    configure_logging(cfg.system.log_level)

    try:
        request = cfg.to_request()
        strategy = cfg.to_strategy()
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    bank = _load_bank(input_dir)
    logger.info(
        "sweep_started input=%s samples=%d target_rate=%d bit_depth=%d strategy=%r",
        input_dir,
        len(bank),
        request.target_sample_rate_hz,
        request.target_bit_depth,
        strategy,
    )
    report = BankSweep(fail_fast=cfg.sweep.fail_fast).sweep(bank, request, strategy)
    bank.save(output_dir)

    table = Table(title=f"Sweep of {input_dir}")
    table.add_column("Sample")
    table.add_column("Result")
    table.add_column("Detail")
    failures = {f.name: f.reason for f in report.failed}
    for entry in bank:
        if entry.name in failures:
            table.add_row(entry.name, "[red]failed[/red]", failures[entry.name])
        elif entry.name in report.resampled:
            table.add_row(entry.name, "[green]resampled[/green]", f"{entry.wave.sample_rate_hz} Hz, {len(entry.wave)} samples")
        else:
            table.add_row(entry.name, "skipped", f"{entry.wave.sample_rate_hz} Hz")
    console.print(table)
    console.print(f"[green]Bank written to:[/green] {output_dir}")

    if not report.ok:
        raise typer.Exit(code=1)


@app.command()
def inspect(input_dir: Path = typer.Argument(..., help="Folder of mono PCM16 WAV samples")) -> None:
    """List the samples of a bank with their rate, length and loop points."""
    bank = _load_bank(input_dir)
    table = Table(title=f"Bank {input_dir}")
    table.add_column("Sample")
    table.add_column("Rate (Hz)", justify="right")
    table.add_column("Samples", justify="right")
    table.add_column("Duration (ms)", justify="right")
    table.add_column("Loop")
    for entry in bank:
        wave = entry.wave
        loop = f"{wave.loop.start_sample}-{wave.loop.end_sample}" if wave.loop else "-"
        table.add_row(entry.name, str(wave.sample_rate_hz), str(len(wave)), str(wave.duration_ms()), loop)
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()


__all__ = ["app", "main"]
