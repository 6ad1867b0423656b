"""
Wall-clock profiling of lifting stages.
"""

import time
from contextlib import contextmanager
from typing import Dict, List

import numpy as np


class StageProfiler:
    """Collects per-stage timings in milliseconds."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.timings: Dict[str, List[float]] = {}
        self._start_times: Dict[str, float] = {}

    def start(self, stage: str):
        if self.enabled:
            self._start_times[stage] = time.perf_counter()

    def stop(self, stage: str):
        if self.enabled and stage in self._start_times:
            elapsed = (time.perf_counter() - self._start_times.pop(stage)) * 1000
            self.timings.setdefault(stage, []).append(elapsed)

    @contextmanager
    def stage(self, name: str):
        self.start(name)
        try:
            yield
        finally:
            self.stop(name)

    def get_summary(self) -> Dict[str, float]:
        """Mean time per stage (ms)."""
        return {stage: float(np.mean(times)) for stage, times in self.timings.items()}

    def get_total(self) -> float:
        if 'total' in self.timings:
            return float(np.sum(self.timings['total']))
        return float(sum(np.sum(t) for t in self.timings.values()))

    def reset(self):
        self.timings.clear()
        self._start_times.clear()
