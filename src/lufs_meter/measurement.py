"""Immutable meter reading handed across the producer/consumer boundary."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Measurement:
    """One throttled snapshot of the five meter values.

    ``true_peak`` is the sample peak over the momentary window, with no
    oversampling, so it under-reads inter-sample peaks.
    """

    momentary: float
    short_term: float
    integrated: float
    lra: float
    true_peak: float

    def to_dict(self) -> dict[str, float]:
        return {
            "momentary": self.momentary,
            "shortTerm": self.short_term,
            "integrated": self.integrated,
            "lra": self.lra,
            "truePeak": self.true_peak,
        }
