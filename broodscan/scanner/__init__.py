"""BroodMinder BLE scanner service."""

import argparse
from typing import List, Optional

from broodscan import __version__

from .config import ScannerConfig, load_config
from .scan_service import ScanService
from .tracker import ReadingTracker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="broodscan",
        description="Scan for BroodMinder BLE advertisements and display sensor data.",
    )
    parser.add_argument("--config", help="Path to YAML config file.")
    parser.add_argument(
        "--duration",
        type=float,
        help="Scan duration in seconds (0 = continuous).",
    )
    parser.add_argument(
        "--celsius",
        action="store_true",
        default=None,
        help="Display temperature in Celsius (default: Fahrenheit).",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        default=None,
        help="Output readings as JSON lines.",
    )
    parser.add_argument(
        "--all",
        dest="show_all",
        action="store_true",
        default=None,
        help="Show all advertisements (don't deduplicate by sample counter).",
    )
    parser.add_argument("--adapter", help="Bluetooth adapter to use, e.g. hci0.")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument(
        "--version",
        action="version",
        version=f"broodscan {__version__}",
    )
    return parser


def apply_arguments(config: ScannerConfig, args: argparse.Namespace) -> ScannerConfig:
    """Override config values with the flags that were given."""
    for name in ("duration", "celsius", "json_output", "show_all", "adapter"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)
    if args.log_level:
        config.log_level = args.log_level.upper()
    return config


def main(argv: Optional[List[str]] = None):
    """Entry point for the scanner."""
    from broodscan.shared.logging import setup_logging
    from .scan_service import run_scanner

    args = build_parser().parse_args(argv)
    config = apply_arguments(load_config(args.config), args)
    setup_logging(config.log_level)

    run_scanner(config)


__all__ = ["ScannerConfig", "ScanService", "ReadingTracker", "load_config", "main"]
