from dataclasses import dataclass
from typing import ClassVar

from diskmon.checks.base import CheckMethod, Verdict
from diskmon.disk.stats import VolumeStats


@dataclass(frozen=True)
class CapacityRate(CheckMethod):
    """Fails when the used share of the volume is strictly above threshold."""

    threshold: float
    name: ClassVar[str] = "capacity_rate"

    def evaluate(self, stats: VolumeStats) -> Verdict:
        current = stats.used_share
        return Verdict(
            violation=self.threshold < current,
            current=current,
            threshold=self.threshold,
        )
