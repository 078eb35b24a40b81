"""Configuration for the BroodMinder scanner."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from broodscan.decoder import BROODMINDER_MANUFACTURER_ID
from broodscan.shared.config import get_config_path, get_log_level, load_yaml_config

logger = logging.getLogger(__name__)


@dataclass
class ScannerConfig:
    """Scan and output settings."""

    duration: float = 0.0  # seconds, 0 = until interrupted
    celsius: bool = False
    json_output: bool = False
    show_all: bool = False  # disable sample counter dedup
    adapter: Optional[str] = None  # e.g. "hci0", None = platform default
    manufacturer_id: int = BROODMINDER_MANUFACTURER_ID
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> "ScannerConfig":
        """Create config from dictionary."""
        scan_data = data.get("scan", {}) or {}
        output_data = data.get("output", {}) or {}

        return cls(
            duration=float(scan_data.get("duration", 0.0)),
            celsius=bool(output_data.get("celsius", False)),
            json_output=bool(output_data.get("json", False)),
            show_all=bool(scan_data.get("show_all", False)),
            adapter=scan_data.get("adapter"),
            manufacturer_id=int(scan_data.get("manufacturer_id", BROODMINDER_MANUFACTURER_ID)),
            log_level=get_log_level(data),
        )


def load_config(config_path: Optional[str] = None) -> ScannerConfig:
    """Load scanner configuration from YAML file and environment.

    Args:
        config_path: Path to YAML config file. If not provided, looks for
                    BROODSCAN_CONFIG env var, then the repo's
                    config/broodscan-{env}.yaml. A missing file means
                    defaults.

    Returns:
        ScannerConfig instance.
    """
    if config_path is None:
        config_path = os.environ.get("BROODSCAN_CONFIG") or str(get_config_path())

    try:
        config = ScannerConfig.from_dict(load_yaml_config(config_path))
        logger.debug(f"Loaded config from {config_path}")
    except FileNotFoundError:
        logger.debug(f"No config file at {config_path}, using defaults")
        config = ScannerConfig()

    # Environment variable overrides
    if adapter := os.environ.get("BROODSCAN_ADAPTER"):
        config.adapter = adapter
    if log_level := os.environ.get("LOG_LEVEL"):
        config.log_level = log_level.upper()

    return config
