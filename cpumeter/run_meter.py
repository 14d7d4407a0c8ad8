#!/usr/bin/env python3
"""
CPU meter runner.

Samples host CPU usage for a fixed duration, or for as long as a given
command runs, then prints and optionally exports the summary.
"""
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from cpumeter.cli.cli import parse_meter_args
from cpumeter.config.config_loader import ConfigLoader
from cpumeter.config.meter_config import MeterConfig
from cpumeter.consts.ProviderType import ProviderType
from cpumeter.models.meter_result import MeterResult
from cpumeter.monitor.cpu_meter import CpuMeter, meter_subprocess
from cpumeter.monitor.errors import NoData, PlatformUnsupported
from cpumeter.provider.factory import create_provider
from cpumeter.util.log_config import attach_log_file, setup_logger

logger = setup_logger(__name__)


def apply_overrides(config: MeterConfig, args) -> MeterConfig:
    """Apply CLI flags on top of the loaded configuration."""
    if args.interval is not None:
        config.interval_ms = args.interval
    if args.duration is not None:
        config.duration_seconds = args.duration
    if args.provider is not None:
        config.provider = ProviderType(args.provider)
    if args.out is not None:
        config.output_path = args.out
    return config


def sample_for_duration(meter: CpuMeter, duration_seconds: float) -> Optional[MeterResult]:
    meter.start()
    try:
        time.sleep(duration_seconds)
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping early")
    finally:
        meter.close()

    try:
        return meter.result()
    except NoData:
        return None


def print_samples(result: MeterResult) -> None:
    headers = ["elapsed_ms", "cpu_percent"]
    rows = [[s.elapsed_ms, f"{s.cpu_percent:.1f}"] for s in result.samples]
    print(tabulate(rows, headers=headers, tablefmt="github", stralign="right", numalign="right"))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the cpumeter command.

    1. Load configuration and apply CLI overrides
    2. Pick a CPU usage provider for this host
    3. Sample for the configured duration or the lifetime of the command
    4. Print the summary and export it to JSON if requested
    """
    args = parse_meter_args(argv)

    try:
        config = ConfigLoader(Path(args.config_dir), env=args.env).config_data
    except (OSError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1
    config = apply_overrides(config, args)
    if args.env:
        logger.info(f"Loaded configuration with environment override: {args.env}")
    if config.log_file:
        attach_log_file(Path(config.log_file))

    try:
        provider = create_provider(config.provider)
    except PlatformUnsupported as e:
        logger.error(str(e))
        return 1

    logger.info("=" * 60)
    logger.info(f"Sampling CPU every {config.interval_ms}ms ({config.provider.value})")
    logger.info("=" * 60)

    if args.command:
        logger.info(f"Running: {' '.join(args.command)}")
        try:
            process = subprocess.Popen(args.command)
        except OSError as e:
            logger.error(f"Could not start command: {e}")
            return 1
        result = meter_subprocess(process, interval_ms=config.interval_ms, provider=provider)
        if process.returncode != 0:
            logger.warning(f"Command exited with status {process.returncode}")
    else:
        meter = CpuMeter(interval_ms=config.interval_ms, provider=provider)
        result = sample_for_duration(meter, config.duration_seconds)
        if meter.last_error is not None:
            logger.error(f"Sampling ended early: {meter.last_error}")

    if result is None:
        logger.error("No CPU samples were recorded")
        return 1

    if args.show_samples:
        print_samples(result)
    result.print_summary()

    if config.output_path:
        output_path = Path(config.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        result.save_to_file(str(output_path))
        logger.info(f"✓ Results exported to: {output_path.resolve()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
