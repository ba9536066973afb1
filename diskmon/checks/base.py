"""
Check methods: named strategies that turn VolumeStats into a verdict.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from diskmon.disk.stats import VolumeStats


@dataclass(frozen=True)
class Verdict:
    """Outcome of evaluating one snapshot against a threshold."""

    violation: bool
    current: float
    threshold: float

    @property
    def ok(self) -> bool:
        return not self.violation


class CheckMethod(ABC):
    """Base class for check methods."""

    name: ClassVar[str] = "base"

    @abstractmethod
    def evaluate(self, stats: VolumeStats) -> Verdict:
        """
        Evaluate a stats snapshot.

        Args:
            stats: Fresh volume statistics for the target

        Returns:
            Verdict carrying the measured value and the threshold
        """
        ...
