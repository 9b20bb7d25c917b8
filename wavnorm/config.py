"""
Configuration loading for WavNormalizer.

Defaults live in DEFAULT_CONFIG; a YAML file can override any of them.
"""

import copy
import logging
import os
from typing import Dict, Optional

import yaml

CONF_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'conf')
CONFIG_FILE = os.path.join(CONF_DIR, 'wavnormalizer_config.yaml')

DEFAULT_CONFIG = {
    'normalize': {
        'output_prefix': 'normalized_',
        'extension': '.wav',
        'case_sensitive': True,
        'skip_normalized': False,
        'strict_chunks': False,
        'workers': 1,
    },
    'logging': {
        'level': 'INFO',
    },
}


def merge_config(base: Dict, overrides: Optional[Dict]) -> Dict:
    """
    Merge override sections into a copy of the base config.

    Only known sections are merged; unknown keys inside them are kept but
    never read.
    """
    config = copy.deepcopy(base)
    if not overrides:
        return config
    if not isinstance(overrides, dict):
        raise ValueError(f"Config must be a mapping of sections, got {type(overrides).__name__}")

    for section, values in overrides.items():
        if section not in config:
            logging.debug(f"Ignoring unknown config section: {section}")
            continue
        if not isinstance(values, dict):
            logging.warning(f"Config section '{section}' must be a mapping, ignoring")
            continue
        config[section].update(values)

    return config


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration from YAML.

    Args:
        config_path: Path to a YAML file. When None, the bundled default file
            is used if present.

    Returns:
        Complete configuration dictionary

    Raises:
        FileNotFoundError: If an explicitly given config file does not exist
        ValueError: If the file is not valid YAML or its top level is not a mapping
    """
    if config_path is None:
        if not os.path.exists(CONFIG_FILE):
            return copy.deepcopy(DEFAULT_CONFIG)
        config_path = CONFIG_FILE
    elif not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}")

    logging.debug(f"Loaded config: {config_path}")
    return merge_config(DEFAULT_CONFIG, file_config)
