from abc import ABC, abstractmethod


class CpuUsageProvider(ABC):
    """Abstract source of the host's instantaneous CPU usage.

    Implementations are created once per session and queried on every tick,
    so ``current_usage_percent`` must be cheap to call repeatedly.
    """

    @abstractmethod
    def current_usage_percent(self) -> float:
        """
        Returns the whole-host CPU usage since the previous call, 0-100.
        """
        pass

    @staticmethod
    def clamp(value: float) -> float:
        return min(100.0, max(0.0, float(value)))
