"""Configuration loading.

Configuration is a nested dictionary read from YAML, JSON or TOML (format
detected from the file extension) and merged over built-in defaults.
Environment variables (optionally from a ``.env`` file) choose the default
config path and output directory.
"""

import copy
import json
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

import dotenv
import yaml
from loguru import logger

from govmetrics.errors import ConfigurationError

dotenv.load_dotenv()

DEFAULT_CONFIG_PATH = "config/governance_config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    'scoring': {
        # Metrics contributing less than this emit an action item
        'action_threshold': 0.9,
        # Shortfall bounds: "low" is exclusive, "medium" and "high" inclusive
        'priority_bands': {
            'low': 0.10,
            'medium': 0.25,
            'high': 0.50,
        },
        # Minimum overall health score for each compliance status
        'compliance_thresholds': {
            'compliant': 90,
            'at_risk': 75,
        },
    },
    'collection': {
        'parallel': True,
        'max_concurrent_calls': 8,
        'timeout_sec': None,
    },
    'output': {
        'directory': 'output',
    },
}


def read_structured_file(path: Union[str, Path]) -> Any:
    """Parse a YAML, JSON or TOML file.

    Raises:
        ConfigurationError: if the file cannot be read or parsed
    """
    file_path = Path(path)
    suffix = file_path.suffix.lower()

    try:
        if suffix == '.toml':
            with open(file_path, 'rb') as f:
                return tomllib.load(f)
        with open(file_path, 'r', encoding='utf-8') as f:
            if suffix in ['.yaml', '.yml']:
                return yaml.safe_load(f)
            return json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read {file_path}: {e}") from e


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load configuration from file, falling back to defaults.

    Args:
        config_path: Path to the configuration file. Defaults to
            ``$GOVMETRICS_CONFIG`` or ``config/governance_config.yaml``.

    Returns:
        Configuration dictionary with defaults filled in
    """
    if config_path is None:
        config_path = os.getenv('GOVMETRICS_CONFIG', DEFAULT_CONFIG_PATH)
    config_file = Path(config_path)

    config = copy.deepcopy(DEFAULT_CONFIG)
    env_output = os.getenv('GOVMETRICS_OUTPUT_DIR')
    if env_output:
        config['output']['directory'] = env_output

    if not config_file.exists():
        logger.warning(f"Config file {config_file} not found, using defaults")
        return config

    config_data = read_structured_file(config_file)
    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise ConfigurationError(f"{config_file}: top level must be a mapping")

    logger.info(f"Loaded governance config from {config_file}")
    return _merge(config, config_data)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(base[key], value)
        else:
            base[key] = value
    return base
