import threading
from typing import List, Optional

import pytest

from cpumeter.provider.base import CpuUsageProvider


class ConstantProvider(CpuUsageProvider):
    def __init__(self, value: float = 25.0):
        self.value = value
        self.calls = 0

    def current_usage_percent(self) -> float:
        self.calls += 1
        return self.value


class ScriptedProvider(CpuUsageProvider):
    """Returns the scripted values in order, then stops the attached meter.

    The reading returned after stop() is discarded by the meter, so a run
    records exactly the scripted values.
    """

    def __init__(self, values: List[float]):
        self.values = list(values)
        self.meter = None

    def current_usage_percent(self) -> float:
        if self.values:
            return self.values.pop(0)
        self.meter.stop()
        return 0.0


class BlockingProvider(CpuUsageProvider):
    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()

    def current_usage_percent(self) -> float:
        self.entered.set()
        self.release.wait(5)
        return 50.0


class FailingProvider(CpuUsageProvider):
    def __init__(self, fail_on_call: int):
        self.fail_on_call = fail_on_call
        self.calls = 0

    def current_usage_percent(self) -> float:
        self.calls += 1
        if self.calls >= self.fail_on_call:
            raise RuntimeError("counter unavailable")
        return 10.0


@pytest.fixture
def scripted_meter():
    from cpumeter.monitor.cpu_meter import CpuMeter

    def _make(values: List[float], interval_ms: int = 10, meter: Optional[CpuMeter] = None):
        provider = ScriptedProvider(values)
        if meter is None:
            meter = CpuMeter(interval_ms=interval_ms, provider=provider)
        else:
            meter.provider = provider
        provider.meter = meter
        return meter

    return _make
