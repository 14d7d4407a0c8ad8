"""
Meter configuration data class.

Holds the settings read from config.yaml; CLI flags override them.
"""
from dataclasses import dataclass
from typing import Optional

from cpumeter.consts.ProviderType import ProviderType


@dataclass
class MeterConfig:

    interval_ms: int = 1000
    duration_seconds: float = 10.0
    provider: ProviderType = ProviderType.PSUTIL
    output_path: Optional[str] = None
    log_file: Optional[str] = None
