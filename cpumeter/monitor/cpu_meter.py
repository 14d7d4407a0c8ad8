"""
CPU Meter Module

Records whole-host CPU usage at a fixed interval in a background thread and
aggregates the recorded series while sampling is still going on.
"""
import subprocess
import threading
from typing import List, Optional

from cpumeter.models.meter_result import MeterResult
from cpumeter.models.sample import Sample
from cpumeter.monitor.errors import AlreadyRunning, NoData
from cpumeter.provider.base import CpuUsageProvider
from cpumeter.provider.factory import create_provider
from cpumeter.util.log_config import setup_logger

logger = setup_logger(__name__)

DEFAULT_INTERVAL_MS = 1000


def _check_interval(interval_ms: int) -> int:
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
        raise ValueError(f"Interval must be a positive number of milliseconds, got {interval_ms!r}")
    return interval_ms


class CpuMeter:
    """
    Records CPU usage snapshots, one per interval, while running.

    Use start() / stop() to run a recording session, and the aggregate
    methods to read it. A restarted session keeps appending to the same
    series; only the elapsed counter starts again from zero.
    """

    def __init__(self, interval_ms: int = DEFAULT_INTERVAL_MS, provider: Optional[CpuUsageProvider] = None):
        """
        Initialize CPU meter.

        Args:
            interval_ms: Sampling interval in milliseconds (default: 1000)
            provider: CPU usage source; chosen for the current platform when omitted

        Raises:
            ValueError: If the interval is not a positive integer
            PlatformUnsupported: If no provider can be obtained on this host
        """
        self.interval_ms = _check_interval(interval_ms)
        self.provider = provider if provider is not None else create_provider()
        self.last_error: Optional[BaseException] = None

        self._samples: List[Sample] = []
        self._elapsed_total = 0
        self._running = False
        self._lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self.thread: Optional[threading.Thread] = None

    def __enter__(self) -> 'CpuMeter':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """
        Start recording in a background thread and return immediately.

        Raises:
            AlreadyRunning: If the sampling loop of this session is active
        """
        with self._lock:
            if self._running:
                raise AlreadyRunning("CPU meter is already running; call stop() first")
            self._elapsed_total = 0
            self.last_error = None
            self._running = True
            # a fresh event per run, so a loop left over from a previous run never resumes
            self._stop_event = threading.Event()

        self.thread = threading.Thread(
            target=self._sampling_loop,
            args=(self._stop_event,),
            name="cpu-meter",
            daemon=True
        )
        self.thread.start()
        logger.info(f"CPU meter started (interval={self.interval_ms}ms)")

    def stop(self) -> None:
        """
        Stop recording. Returns without waiting for the sampling thread; a
        provider call already in progress finishes in the background and its
        reading is discarded.
        """
        with self._lock:
            was_running = self._running
            self._running = False
            if self._stop_event is not None:
                self._stop_event.set()

        if was_running:
            logger.info(f"CPU meter stopped after {self._elapsed_total}ms")

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the sampling thread to exit.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Returns:
            True if no sampling thread is alive anymore
        """
        if self.thread is None:
            return True
        self.thread.join(timeout=timeout)
        return not self.thread.is_alive()

    def close(self, timeout: Optional[float] = 2.0) -> None:
        """Stop recording and wait for the sampling thread to exit."""
        self.stop()
        if not self.join(timeout=timeout):
            logger.warning("CPU meter thread did not exit; the provider call may be hanging")

    def reset(self) -> None:
        """
        Discard the recorded series of a stopped session.

        Raises:
            AlreadyRunning: If the session is still recording
        """
        with self._lock:
            if self._running:
                raise AlreadyRunning("Cannot reset a running CPU meter")
            self._samples = []
            self._elapsed_total = 0
            self.last_error = None

    def set_interval(self, interval_ms: int) -> None:
        """
        Change the interval used by future ticks. Samples already recorded keep
        their elapsed values.

        Changing it mid-run is allowed but makes sample_count() diverge from
        the number of recorded samples; prefer a new meter instead.
        """
        interval_ms = _check_interval(interval_ms)
        with self._lock:
            if self._running:
                logger.warning(f"Interval changed from {self.interval_ms}ms to {interval_ms}ms while running")
            self.interval_ms = interval_ms

    def _sampling_loop(self, stop_event: threading.Event) -> None:
        """Main sampling loop (runs in background thread)"""
        while not stop_event.is_set():
            try:
                cpu_percent = self.provider.current_usage_percent()
            except Exception as e:
                with self._lock:
                    stop_event.set()
                    if self._stop_event is not stop_event:
                        logger.debug(f"Ignoring provider failure from a previous run: {e}")
                        break
                    self.last_error = e
                    self._running = False
                logger.warning(f"CPU meter stopped, provider failed: {e}")
                break

            with self._lock:
                if stop_event.is_set():
                    break
                self._samples.append(Sample(elapsed_ms=self._elapsed_total, cpu_percent=cpu_percent))
                self._elapsed_total += self.interval_ms
                interval_ms = self.interval_ms

            # Sleep until next sample, waking early on stop()
            stop_event.wait(interval_ms / 1000.0)

    def samples(self) -> List[Sample]:
        """
        Collection of CPU usage snapshots, one per interval.

        Returns:
            Copy of the series as recorded at the time of the call
        """
        with self._lock:
            return list(self._samples)

    def _values(self) -> List[float]:
        values = [s.cpu_percent for s in self.samples()]
        if not values:
            raise NoData("No CPU samples recorded yet")
        return values

    def average(self) -> float:
        """
        Average CPU usage over the recorded series.

        Raises:
            NoData: If no sample has been recorded
        """
        values = self._values()
        return sum(values) / len(values)

    def max(self) -> float:
        """Highest recorded CPU usage; raises NoData on an empty series."""
        return max(self._values())

    def min(self) -> float:
        """Lowest recorded CPU usage; raises NoData on an empty series."""
        return min(self._values())

    def runtime(self) -> int:
        """Milliseconds covered by the current (or last) run."""
        return self._elapsed_total

    def sample_count(self) -> int:
        """
        Snapshots taken in the current (or last) run, derived as
        runtime / interval rather than counted from the series.
        """
        with self._lock:
            return self._elapsed_total // self.interval_ms

    def result(self) -> MeterResult:
        """
        Get a summary of the recorded series.

        Raises:
            NoData: If no sample has been recorded
        """
        with self._lock:
            samples = list(self._samples)
            runtime_ms = self._elapsed_total
            interval_ms = self.interval_ms

        if not samples:
            raise NoData("No CPU samples recorded yet")

        cpu_values = [s.cpu_percent for s in samples]
        return MeterResult(
            average_cpu_percent=sum(cpu_values) / len(cpu_values),
            peak_cpu_percent=max(cpu_values),
            min_cpu_percent=min(cpu_values),
            runtime_ms=runtime_ms,
            sample_count=runtime_ms // interval_ms,
            interval_ms=interval_ms,
            samples=samples
        )


def meter_subprocess(
    process: 'subprocess.Popen',
    interval_ms: int = DEFAULT_INTERVAL_MS,
    provider: Optional[CpuUsageProvider] = None
) -> Optional[MeterResult]:
    """
    Record host CPU usage for the lifetime of a subprocess.

    Args:
        process: subprocess.Popen instance
        interval_ms: Sampling interval in milliseconds
        provider: CPU usage source; chosen for the current platform when omitted

    Returns:
        MeterResult or None if no sample was recorded
    """
    meter = CpuMeter(interval_ms=interval_ms, provider=provider)
    meter.start()
    try:
        # Wait for process to complete
        process.wait()
    finally:
        meter.close()

    try:
        return meter.result()
    except NoData:
        return None
