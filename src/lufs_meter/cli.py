"""CLI interface for lufs-meter."""

import logging
from pathlib import Path

import typer

from .display import format_db, format_readout
from .infrastructure.sounddevice_source import SoundDeviceSource
from .interfaces.cli_handlers import meter_file, run_live
from .utils.config import DEFAULT_BLOCK_SIZE

app = typer.Typer(help="lufs-meter command line interface")


@app.callback()
def configure(
    log_level: str = typer.Option("WARNING", "--log-level", help="Python logging level."),
) -> None:
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command("analyze")
def analyze_command(
    path: Path = typer.Argument(..., help="Audio file to meter."),
    config: Path | None = typer.Option(None, "--config", "-c", help="JSON/YAML meter settings."),
    block_size: int | None = typer.Option(
        None, "--block-size", min=1, help="Samples per block fed to the analyzer."
    ),
    follow: bool = typer.Option(False, "--follow", help="Print every measurement, not just the last."),
    report_json: Path | None = typer.Option(
        None, "--report-json", help="Optional path to write the full measurement series as JSON."
    ),
    reference_lufs: bool = typer.Option(
        False, "--reference-lufs", help="Also compute BS.1770 integrated loudness with pyloudnorm."
    ),
) -> None:
    """Replay an audio file through the meter as if it were playing."""

    report = meter_file(
        path,
        config_path=config,
        block_size=block_size,
        with_reference=reference_lufs,
        report_json=report_json,
    )

    if follow:
        for measurement in report.measurements:
            typer.echo(format_readout(measurement))
    elif report.final is not None:
        typer.echo(format_readout(report.final))
    else:
        typer.echo("No measurements: audio shorter than one throttle period.")

    typer.echo(
        f"Duration: {report.duration_seconds:.2f}s @ {report.sample_rate_hz} Hz, "
        f"{len(report.measurements)} measurements"
    )
    if reference_lufs:
        reference = report.reference_integrated_lufs
        typer.echo(f"Reference integrated (BS.1770): {format_db(reference) if reference is not None else 'n/a'} LUFS")


@app.command("live")
def live_command(
    device: str | None = typer.Option(None, "--device", "-d", help="Input device name or index."),
    sample_rate: int | None = typer.Option(
        None, "--sample-rate", min=1, help="Requested rate; the device may negotiate another."
    ),
    duration: float | None = typer.Option(None, "--duration", min=0.0, help="Seconds to run; default until Ctrl-C."),
    block_size: int = typer.Option(DEFAULT_BLOCK_SIZE, "--block-size", min=1),
    channel: int = typer.Option(0, "--channel", min=0, help="Zero-based input channel to meter."),
    config: Path | None = typer.Option(None, "--config", "-c", help="JSON/YAML meter settings."),
) -> None:
    """Meter a live input device."""

    device_id: int | str | None = int(device) if device is not None and device.isdigit() else device
    source = SoundDeviceSource(
        sample_rate_hz=sample_rate,
        block_size=block_size,
        device=device_id,
        channel=channel,
        duration_s=duration,
    )
    analyzer = run_live(lambda measurement: typer.echo(format_readout(measurement)), source=source, config_path=config)
    typer.echo(f"Stopped. Sample rate: {analyzer.settings.sample_rate_hz} Hz, input overflows: {source.xrun_count}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
