"""Helpers for measuring layouts."""

from .benchmarking import PerformanceStats, Timer, TimingStats, timer
from .geometry import bond_lengths, centroid, displacements, z_range

__all__ = [
    "PerformanceStats",
    "Timer",
    "TimingStats",
    "timer",
    "bond_lengths",
    "centroid",
    "displacements",
    "z_range",
]
