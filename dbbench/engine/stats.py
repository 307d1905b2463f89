from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class PhaseStats:
    """Samples and aggregates collected for one phase of a run (in nanoseconds)."""

    samples: List[int] = field(default_factory=list)
    min_time: Optional[int] = None
    max_time: int = 0
    avg_time: int = 0
    total_time: int = 0
    failures: int = 0

    @property
    def count(self) -> int:
        return len(self.samples)

    @property
    def has_data(self) -> bool:
        return bool(self.samples)

    def reset(self) -> None:
        self.samples.clear()
        self.min_time = None
        self.max_time = 0
        self.avg_time = 0
        self.total_time = 0
        self.failures = 0

    def record(self, duration: int) -> None:
        """Add a sample; equal values never replace the current min or max."""
        self.samples.append(duration)
        if self.min_time is None or duration < self.min_time:
            self.min_time = duration
        if duration > self.max_time:
            self.max_time = duration
        self.total_time += duration

    def record_failure(self) -> None:
        self.failures += 1

    def calculate_derived_metrics(self) -> None:
        """Compute the truncating mean over the recorded samples."""
        if self.samples:
            self.avg_time = self.total_time // len(self.samples)
