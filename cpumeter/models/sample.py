from dataclasses import dataclass


@dataclass(frozen=True)
class Sample:
    """Single CPU usage observation"""
    elapsed_ms: int  # time since the run started, a multiple of the interval
    cpu_percent: float
