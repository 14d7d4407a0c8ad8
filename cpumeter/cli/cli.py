#!/usr/bin/env python3
"""
Command-line parsing for the cpumeter entry point.
"""
import argparse
import sys
from typing import List, Optional

from cpumeter.consts.ProviderType import ProviderType


def build_env_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the common --env option.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: parser preconfigured with the --env argument.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'dev', 'prod'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )
    return parser


def build_meter_parser() -> argparse.ArgumentParser:
    ap = build_env_parser("Record host CPU usage at a fixed interval and print avg/min/peak")
    ap.add_argument("--config-dir", type=str, default="config",
                    help="Directory holding config.yaml and config_<env>.yaml (default: ./config)")
    ap.add_argument("--interval", type=int, default=None,
                    help="Sampling interval in milliseconds (overrides config)")
    ap.add_argument("--duration", type=float, default=None,
                    help="Seconds to sample when no command is given (overrides config)")
    ap.add_argument("--provider", choices=[p.value for p in ProviderType], default=None,
                    help="CPU usage provider: psutil | procstat (overrides config)")
    ap.add_argument("--out", type=str, default=None,
                    help="If set, write the summary and all samples as JSON to this path")
    ap.add_argument("--show-samples", action="store_true",
                    help="Print every recorded sample as a table")
    ap.add_argument("command", nargs=argparse.REMAINDER,
                    help="Optional command to run; sampling lasts until it exits (use -- before it)")
    return ap


def validate_meter_args(args: argparse.Namespace) -> None:
    if args.interval is not None and args.interval <= 0:
        print(f"Error: --interval must be positive, got {args.interval}", file=sys.stderr)
        sys.exit(1)

    if args.duration is not None and args.duration < 0:
        print(f"Error: --duration must not be negative, got {args.duration}", file=sys.stderr)
        sys.exit(1)

    if args.command and args.command[0] == "--":
        args.command = args.command[1:]


def parse_meter_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    args = build_meter_parser().parse_args(argv)
    validate_meter_args(args)
    return args
