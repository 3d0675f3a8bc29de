# src/molayout/core/utils/benchmarking.py

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from statistics import mean, median
from typing import Dict, Iterator, List, Optional


@dataclass
class Timer:
    """Context manager for timing code blocks."""

    name: str
    start_time: float = field(default=0.0)
    end_time: float = field(default=0.0)

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self.end_time = time.perf_counter()

    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.end_time == 0.0:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time


@dataclass
class TimingStats:
    """Timings of repeated layout calls."""

    name: str
    times: List[float] = field(default_factory=list)
    atoms_processed: int = 0

    def add_timing(self, elapsed: float, atoms: int = 0) -> None:
        """Add a timing measurement.

        Args:
            elapsed: Time taken in seconds
            atoms: Number of atoms laid out in that time
        """
        self.times.append(elapsed)
        self.atoms_processed += atoms

    @property
    def count(self) -> int:
        return len(self.times)

    @property
    def total_time(self) -> float:
        return sum(self.times)

    @property
    def avg_time(self) -> float:
        return mean(self.times) if self.times else 0.0

    @property
    def median_time(self) -> float:
        return median(self.times) if self.times else 0.0

    @property
    def throughput(self) -> float:
        """Atoms laid out per second."""
        if self.total_time > 0 and self.atoms_processed > 0:
            return self.atoms_processed / self.total_time
        return 0.0

    def __str__(self) -> str:
        if not self.times:
            return f"{self.name}: No timing data"

        stats = [
            f"Total: {self.total_time:.2f}s",
            f"Count: {self.count}",
            f"Avg: {self.avg_time:.3f}s",
            f"Median: {self.median_time:.3f}s",
            f"Max: {max(self.times):.3f}s",
        ]
        if self.throughput > 0:
            stats.append(f"Throughput: {self.throughput:.0f} atoms/s")
        return f"{self.name}: " + ", ".join(stats)


class PerformanceStats:
    """Collect and report timings per named operation."""

    def __init__(self) -> None:
        self.stats: Dict[str, TimingStats] = {}

    def get_stats(self, name: str) -> TimingStats:
        if name not in self.stats:
            self.stats[name] = TimingStats(name=name)
        return self.stats[name]

    def add_timing(self, name: str, elapsed: float, atoms: int = 0) -> None:
        self.get_stats(name).add_timing(elapsed, atoms)

    def report(self) -> str:
        """Generate a performance report."""
        if not self.stats:
            return "No performance data collected"
        return "\n".join(str(self.stats[name]) for name in sorted(self.stats))


@contextmanager
def timer(
    name: str, stats: Optional[PerformanceStats] = None, atoms: int = 0
) -> Iterator[Timer]:
    """Time a block and optionally record it under a name in stats.

    Args:
        name: Name of the operation being timed
        stats: Optional PerformanceStats object to collect metrics
        atoms: Number of atoms processed in the block
    """
    with Timer(name) as t:
        yield t
    if stats is not None:
        stats.add_timing(name, t.elapsed(), atoms)
