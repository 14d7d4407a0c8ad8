"""Errors raised by the CPU meter."""


class CpuMeterError(Exception):
    """Base class for CPU meter errors"""


class PlatformUnsupported(CpuMeterError):
    """No CPU usage provider can be obtained on this host."""

    def __init__(self, system: str, provider: str):
        self.system = system
        self.provider = provider
        super().__init__(f"CPU usage provider '{provider}' is not supported on platform '{system}'")


class AlreadyRunning(CpuMeterError):
    """start() was called on a session whose sampling loop is still active."""


class NoData(CpuMeterError):
    """An aggregate was requested before any sample was recorded."""
