"""Data models for recorded CPU samples and meter summaries."""

from .meter_result import MeterResult
from .sample import Sample

__all__ = ["MeterResult", "Sample"]
