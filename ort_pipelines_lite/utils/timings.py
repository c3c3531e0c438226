"""
Per-stage timing counters.

A Timings instance accumulates the number of calls and the total elapsed
nanoseconds for one pipeline stage. Counters are owned by a pipeline
instance and updated from any thread executing a call on it.
"""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass
class TimingStats:
    """Snapshot of a Timings counter."""
    name: str
    num_calls: int
    total_ns: int
    average_ns: float


class Timings:
    """Thread-safe accumulator of call count and elapsed time for a stage.

    Attributes:
        name: Stage name used in reporting.
        num_calls: Number of recorded calls.
        total_ns: Sum of recorded durations in nanoseconds.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.num_calls = 0
        self.total_ns = 0

        # Guards both counters so a call is never half-recorded
        self.lock = threading.Lock()

    def record_call(self, duration_ns: int) -> None:
        """Record one call of the given duration.

        Args:
            duration_ns: Elapsed time of the call in nanoseconds.

        Raises:
            ValueError: If duration_ns is negative.
        """
        if duration_ns < 0:
            raise ValueError(f"duration_ns must be non-negative, got {duration_ns}")

        with self.lock:
            self.num_calls += 1
            self.total_ns += duration_ns

    @contextmanager
    def measure(self) -> Iterator[None]:
        """Time the enclosed block and record it if it completes.

        A block that raises is not counted.
        """
        start = time.perf_counter_ns()
        yield
        self.record_call(time.perf_counter_ns() - start)

    @property
    def average_ns(self) -> float:
        """Average call duration in nanoseconds (0.0 before the first call)."""
        with self.lock:
            if self.num_calls == 0:
                return 0.0
            return self.total_ns / self.num_calls

    def get_stats(self) -> TimingStats:
        """Get a consistent snapshot of the counter.

        Returns:
            TimingStats for this stage.
        """
        with self.lock:
            num_calls = self.num_calls
            total_ns = self.total_ns

        average_ns = total_ns / num_calls if num_calls > 0 else 0.0
        return TimingStats(
            name=self.name,
            num_calls=num_calls,
            total_ns=total_ns,
            average_ns=average_ns,
        )

    def reset(self) -> None:
        """Reset both counters to zero."""
        with self.lock:
            self.num_calls = 0
            self.total_ns = 0

    def __repr__(self) -> str:
        return (
            f"Timings(name='{self.name}', num_calls={self.num_calls}, "
            f"total_ns={self.total_ns})"
        )
