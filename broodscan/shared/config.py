"""Configuration file and environment helpers."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv

REPO_CONFIG_DIR = Path(__file__).parent.parent.parent / "config"


def get_environment() -> str:
    """Installation name from BROODSCAN_ENV, 'default' when unset."""
    return os.getenv("BROODSCAN_ENV", "default")


def get_config_path(
    config_name: Optional[str] = None,
    config_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """Locate a configuration file.

    Args:
        config_name: File name. Defaults to broodscan-{environment}.yaml.
        config_dir: Directory holding config files. Defaults to the repo's
            config/ directory.

    Returns:
        Path to the configuration file (which may not exist).
    """
    config_dir = Path(config_dir) if config_dir is not None else REPO_CONFIG_DIR
    if config_name is None:
        config_name = f"broodscan-{get_environment()}.yaml"
    return config_dir / config_name


def load_env_files() -> None:
    """Load config/.env from the repo, then a .env in the working directory.

    Variables already set in the environment win.
    """
    load_dotenv(REPO_CONFIG_DIR / ".env")
    load_dotenv()


def load_yaml_config(
    config_path: Optional[Union[str, Path]] = None,
    load_env: bool = True,
) -> dict:
    """Load a YAML configuration file.

    Args:
        config_path: Path to config file. If None, uses get_config_path().
        load_env: Whether to load .env files first.

    Returns:
        Configuration dictionary, empty for an empty file.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
    """
    if load_env:
        load_env_files()

    config_path = Path(config_path) if config_path is not None else get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def get_log_level(config: dict) -> str:
    """Log level from a config dict, INFO by default."""
    return str(config.get("log_level", "INFO")).upper()
