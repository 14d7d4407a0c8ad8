from pathlib import Path
from typing import Tuple

from cpumeter.provider.base import CpuUsageProvider

PROC_STAT = Path("/proc/stat")


class ProcStatCpuProvider(CpuUsageProvider):
    """Linux CPU usage computed from the aggregate ``cpu`` line of /proc/stat.

    Each reading is the busy share of the jiffies elapsed since the previous
    reading. Raises OSError at construction when the file cannot be read.
    """

    def __init__(self, stat_path: Path = PROC_STAT):
        self.stat_path = stat_path
        self._last_busy, self._last_total = self._read_times()

    def current_usage_percent(self) -> float:
        busy, total = self._read_times()
        delta_busy = busy - self._last_busy
        delta_total = total - self._last_total
        self._last_busy, self._last_total = busy, total

        if delta_total <= 0:
            return 0.0
        return self.clamp(100.0 * delta_busy / delta_total)

    def _read_times(self) -> Tuple[int, int]:
        with open(self.stat_path, "r", encoding="utf-8") as f:
            for line in f:
                fields = line.split()
                if fields and fields[0] == "cpu":
                    break
            else:
                raise ValueError(f"No aggregate cpu line in {self.stat_path}")

        # user nice system idle iowait irq softirq steal; guest time is already in user
        values = [int(v) for v in fields[1:9]]
        idle = values[3] + (values[4] if len(values) > 4 else 0)
        total = sum(values)
        return total - idle, total
