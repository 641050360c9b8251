"""Gated running average behind the integrated loudness estimate.

A single relative gate is applied: any evaluation whose momentary value sits
at or below ``gate_threshold_db`` is left out of the average entirely.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .statistics import FLOOR_DB

GATE_THRESHOLD_DB = -70.0


@dataclass(slots=True)
class IntegrationState:
    gate_threshold_db: float = GATE_THRESHOLD_DB
    energy_sum: float = 0.0
    count: int = 0

    def accumulate(self, momentary_db: float) -> bool:
        """Fold one momentary reading into the average if it passes the gate."""

        if momentary_db <= self.gate_threshold_db:
            return False
        self.energy_sum += 10.0 ** (momentary_db / 10.0)
        self.count += 1
        return True

    def integrated_db(self) -> float:
        if self.count == 0:
            return FLOOR_DB
        mean_energy = self.energy_sum / self.count
        if mean_energy <= 0.0:
            return FLOOR_DB
        return 10.0 * math.log10(mean_energy)

    def reset(self) -> None:
        self.energy_sum = 0.0
        self.count = 0
