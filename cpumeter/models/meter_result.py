"""CPU meter result data model."""

from dataclasses import dataclass
from typing import Any, Dict, List
import json

from cpumeter.models.sample import Sample


@dataclass
class MeterResult:
    """
    Summary of a sampling session at the moment it was taken.

    This is the structure that gets serialized to JSON output files.
    """
    # CPU statistics
    average_cpu_percent: float
    peak_cpu_percent: float
    min_cpu_percent: float

    # Session timing
    runtime_ms: int
    sample_count: int
    interval_ms: int

    # All samples for detailed analysis
    samples: List[Sample]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            # CPU stats
            'average_cpu_percent': self.average_cpu_percent,
            'peak_cpu_percent': self.peak_cpu_percent,
            'min_cpu_percent': self.min_cpu_percent,

            # Timing
            'runtime_ms': self.runtime_ms,
            'sample_count': self.sample_count,
            'interval_ms': self.interval_ms,

            # Detailed samples
            'samples': [
                {
                    'elapsed_ms': s.elapsed_ms,
                    'cpu_percent': s.cpu_percent
                }
                for s in self.samples
            ]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MeterResult':
        """Create MeterResult from dictionary."""
        samples = [Sample(elapsed_ms=s['elapsed_ms'], cpu_percent=s['cpu_percent']) for s in data['samples']]
        return cls(
            average_cpu_percent=data['average_cpu_percent'],
            peak_cpu_percent=data['peak_cpu_percent'],
            min_cpu_percent=data['min_cpu_percent'],
            runtime_ms=data['runtime_ms'],
            sample_count=data['sample_count'],
            interval_ms=data['interval_ms'],
            samples=samples,
        )

    def save_to_file(self, file_path: str) -> None:
        """Save meter result to JSON file."""
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

    @classmethod
    def load_from_file(cls, file_path: str) -> 'MeterResult':
        """Load meter result from JSON file."""
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def format_cpu_stats(self) -> str:
        """Format CPU statistics for display."""
        return "cpu: avg={:.1f}%  min={:.1f}%  peak={:.1f}%".format(
            self.average_cpu_percent,
            self.min_cpu_percent,
            self.peak_cpu_percent,
        )

    def format_timing_stats(self) -> str:
        return "runtime: {}ms  samples={}  interval={}ms".format(
            self.runtime_ms,
            self.sample_count,
            self.interval_ms,
        )

    def print_summary(self) -> None:
        """Print formatted summary to console."""
        print("\n=== Summary ===")
        print(self.format_cpu_stats())
        print(self.format_timing_stats())
