"""Developer tooling for markup trees."""

from .profiling import (
    PerformanceProfiler,
    PhasePerformance,
    PhaseProfiler,
    ProfilingSession,
    benchmark_tree,
    build_synthetic_tree,
)

__all__ = [
    "PerformanceProfiler",
    "PhasePerformance",
    "PhaseProfiler",
    "ProfilingSession",
    "benchmark_tree",
    "build_synthetic_tree",
]
