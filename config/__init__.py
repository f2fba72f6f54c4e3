"""
Configuration module for LINE training.

This module provides configuration loading and command line overrides.
"""

from pathlib import Path
import yaml
from typing import Dict, Any, Optional


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, loads default.yaml

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_path = Path(__file__).parent / "default.yaml"
    else:
        config_path = Path(config_path)

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def get_default_config() -> Dict[str, Any]:
    """Get default configuration dictionary."""
    return load_config()


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Set dotted keys ("training.num_threads") on a configuration.

    None values are skipped so unset command line options keep the file value.

    Args:
        config: Configuration dictionary, updated in place
        overrides: Mapping of dotted key to value

    Returns:
        The updated configuration
    """
    for dotted_key, value in overrides.items():
        if value is None:
            continue
        section, key = dotted_key.split('.', 1)
        if config.get(section) is None:
            config[section] = {}
        config[section][key] = value
    return config


__all__ = ['load_config', 'get_default_config', 'apply_overrides']
