import psutil

from cpumeter.provider.base import CpuUsageProvider


class PsutilCpuProvider(CpuUsageProvider):
    """System-wide CPU usage through psutil."""

    def __init__(self):
        # Initialize CPU percent (first call returns 0.0)
        psutil.cpu_percent(interval=None)

    def current_usage_percent(self) -> float:
        return self.clamp(psutil.cpu_percent(interval=None))
