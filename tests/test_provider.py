import platform

import pytest

from cpumeter.consts.ProviderType import ProviderType
from cpumeter.monitor.cpu_meter import CpuMeter
from cpumeter.monitor.errors import PlatformUnsupported
from cpumeter.provider.base import CpuUsageProvider
from cpumeter.provider.factory import create_provider
from cpumeter.provider.procstat_provider import ProcStatCpuProvider
from cpumeter.provider.psutil_provider import PsutilCpuProvider


def write_stat(path, user, system, idle, iowait=0):
    path.write_text(
        f"cpu  {user} 0 {system} {idle} {iowait} 0 0 0 0 0\n"
        f"cpu0 {user} 0 {system} {idle} {iowait} 0 0 0 0 0\n"
        "intr 12345\n",
        encoding="utf-8",
    )


def test_unknown_platform_is_unsupported():
    with pytest.raises(PlatformUnsupported) as exc_info:
        create_provider(system="Plan9")

    assert exc_info.value.system == "Plan9"
    assert exc_info.value.provider == "psutil"


def test_procstat_requires_linux():
    with pytest.raises(PlatformUnsupported):
        create_provider(ProviderType.PROCSTAT, system="Windows")


def test_meter_construction_fails_on_unsupported_host(monkeypatch):
    monkeypatch.setattr(platform, "system", lambda: "Plan9")

    with pytest.raises(PlatformUnsupported):
        CpuMeter(interval_ms=100)


def test_psutil_provider_reports_percentage():
    provider = create_provider(ProviderType.PSUTIL, system="Linux")

    assert isinstance(provider, PsutilCpuProvider)
    value = provider.current_usage_percent()
    assert 0.0 <= value <= 100.0


def test_procstat_busy_share_between_readings(tmp_path):
    stat = tmp_path / "stat"
    write_stat(stat, user=100, system=100, idle=800)
    provider = ProcStatCpuProvider(stat_path=stat)

    write_stat(stat, user=150, system=150, idle=880, iowait=20)

    # busy +100, total +200
    assert provider.current_usage_percent() == pytest.approx(50.0)


def test_procstat_without_progress_reads_zero(tmp_path):
    stat = tmp_path / "stat"
    write_stat(stat, user=10, system=10, idle=80)
    provider = ProcStatCpuProvider(stat_path=stat)

    assert provider.current_usage_percent() == 0.0


def test_procstat_rejects_file_without_cpu_line(tmp_path):
    stat = tmp_path / "stat"
    stat.write_text("intr 1\n", encoding="utf-8")

    with pytest.raises(ValueError):
        ProcStatCpuProvider(stat_path=stat)


def test_procstat_missing_file(tmp_path):
    with pytest.raises(OSError):
        ProcStatCpuProvider(stat_path=tmp_path / "missing")


@pytest.mark.parametrize("raw, expected", [(-3.0, 0.0), (42.5, 42.5), (130.0, 100.0)])
def test_clamp(raw, expected):
    assert CpuUsageProvider.clamp(raw) == expected
