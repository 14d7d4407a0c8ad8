"""CPU usage providers and platform selection."""

from .base import CpuUsageProvider
from .factory import create_provider
from .procstat_provider import ProcStatCpuProvider
from .psutil_provider import PsutilCpuProvider

__all__ = ["CpuUsageProvider", "create_provider", "ProcStatCpuProvider", "PsutilCpuProvider"]
