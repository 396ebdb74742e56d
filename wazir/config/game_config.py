"""
Application configuration and constants.
"""

from dataclasses import dataclass


@dataclass
class GameConfig:
    """Configuration for the companion app."""
    
    # Storage
    data_dir: str = "data"  # Directory holding the JSON records
    
    # Room settings
    default_num_players: int = 4
    max_num_players: int = 20  # Cap enforced when joining; the role shuffle has no limit
    
    # Logging
    log_level: str = "WARNING"


# Default configuration instance
default_config = GameConfig()
