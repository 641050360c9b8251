"""Text rendering of meter readings for terminals and logs."""

from __future__ import annotations

from .measurement import Measurement
from .statistics import FLOOR_DB

SIGNAL_PRESENT_DB = -60.0
NO_SIGNAL_TEXT = "-oo"


def format_db(value: float) -> str:
    if value <= FLOOR_DB:
        return NO_SIGNAL_TEXT
    return f"{value:.1f}"


def signal_present(measurement: Measurement) -> bool:
    return measurement.momentary > SIGNAL_PRESENT_DB


def level_bar(value_db: float, floor: float = -60.0, ceil: float = 0.0, width: int = 20) -> str:
    value_db = max(floor, min(ceil, value_db))
    fill = int((value_db - floor) / (ceil - floor) * width + 0.5)
    return "[" + ("#" * fill).ljust(width, ".") + "]"


def format_readout(measurement: Measurement) -> str:
    """Single-line readout: M / S / I / LRA / TP plus a momentary bar."""

    led = "*" if signal_present(measurement) else " "
    return (
        f"{led} M {format_db(measurement.momentary):>6} LUFS | "
        f"S {format_db(measurement.short_term):>6} LUFS | "
        f"I {format_db(measurement.integrated):>6} LUFS | "
        f"LRA {measurement.lra:5.1f} LU | "
        f"TP {format_db(measurement.true_peak):>6} dBTP "
        f"{level_bar(measurement.momentary)}"
    )
