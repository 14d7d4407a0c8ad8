"""Factory for creating platform-specific CPU usage providers."""
import platform
from typing import Optional

from cpumeter.consts.ProviderType import ProviderType
from cpumeter.monitor.errors import PlatformUnsupported
from cpumeter.provider.base import CpuUsageProvider
from cpumeter.provider.procstat_provider import ProcStatCpuProvider
from cpumeter.provider.psutil_provider import PsutilCpuProvider
from cpumeter.util.log_config import setup_logger

logger = setup_logger(__name__)

SUPPORTED_PLATFORMS = {
    ProviderType.PSUTIL: {"Windows", "Linux", "Darwin", "FreeBSD", "OpenBSD", "NetBSD", "SunOS", "AIX"},
    ProviderType.PROCSTAT: {"Linux"},
}


def create_provider(
    provider_type: Optional[ProviderType] = None,
    system: Optional[str] = None
) -> CpuUsageProvider:
    """
    Create a CPU usage provider for the current platform.

    Args:
        provider_type: Requested implementation (default: psutil)
        system: Platform name as reported by platform.system(); detected when omitted

    Returns:
        CpuUsageProvider instance ready to be queried

    Raises:
        PlatformUnsupported: If the provider cannot be obtained on this host
    """
    provider_type = provider_type or ProviderType.PSUTIL
    system = system or platform.system()

    if system not in SUPPORTED_PLATFORMS[provider_type]:
        raise PlatformUnsupported(system, provider_type.value)

    if provider_type == ProviderType.PSUTIL:
        provider = PsutilCpuProvider()
    elif provider_type == ProviderType.PROCSTAT:
        try:
            provider = ProcStatCpuProvider()
        except (OSError, ValueError) as e:
            raise PlatformUnsupported(system, provider_type.value) from e
    else:
        raise ValueError(f"Unsupported provider type: {provider_type}")

    logger.debug(f"Using {provider_type.value} CPU usage provider on {system}")
    return provider
