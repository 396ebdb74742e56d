"""
Configuration loader for YAML-based app configurations.
"""

import logging
import yaml
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .game_config import GameConfig, default_config

logger = logging.getLogger(__name__)


def load_config_from_yaml(config_path: str) -> GameConfig:
    """
    Load app configuration from a YAML file.
    
    Args:
        config_path: Path to the YAML configuration file
        
    Returns:
        GameConfig instance with values from YAML file
        
    Raises:
        FileNotFoundError: If the config file doesn't exist
        yaml.YAMLError: If the YAML file is invalid
    """
    config_file = Path(config_path)
    
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    
    with open(config_file, 'r') as f:
        config_dict = yaml.safe_load(f)
    
    if config_dict is None:
        return replace(default_config)
    
    config = GameConfig()
    
    for key, value in config_dict.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            logger.warning("Unknown config key '%s' in YAML file", key)
    
    return config


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load configuration from YAML file or return default.
    
    Args:
        config_path: Optional path to YAML config file. If None, returns default config.
        
    Returns:
        GameConfig instance
    """
    if config_path is None:
        return replace(default_config)
    
    return load_config_from_yaml(config_path)
