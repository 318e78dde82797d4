"""
Abbreviator Central Configuration
Contains file locations, option naming and caching parameters
"""

from dataclasses import dataclass
from typing import List, Optional
import os

import yaml


@dataclass
class CacheConfig:
    """Configuration for caching rewrite decisions"""

    enabled: bool = True

    # YAML file backing the key-value store; None keeps everything in memory
    store_path: Optional[str] = None

    # Files whose modification also invalidates cached decisions
    watched_files: List[str] = None

    def __post_init__(self):
        if self.watched_files is None:
            self.watched_files = []


@dataclass
class AbbreviatorConfig:
    """Main configuration class combining all settings"""

    cache: CacheConfig

    # Prefix for every key written to the store
    option_prefix: str = "abbreviator-"

    # Paths
    abbreviations_file: str = "./abbreviations.yaml"

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    def __init__(self, cache: Optional[CacheConfig] = None):
        """Initialize with optional custom cache configuration"""
        self.cache = cache or CacheConfig()
        self.option_prefix = "abbreviator-"
        self.abbreviations_file = "./abbreviations.yaml"
        self.log_level = "INFO"
        self.debug = False

        # Override with environment variables if present
        self._load_env_overrides()

    def _load_env_overrides(self):
        """Load configuration overrides from environment variables"""
        if os.getenv("ABBREVIATOR_ABBREVIATIONS_FILE"):
            self.abbreviations_file = os.getenv("ABBREVIATOR_ABBREVIATIONS_FILE")

        if os.getenv("ABBREVIATOR_OPTION_PREFIX"):
            self.option_prefix = os.getenv("ABBREVIATOR_OPTION_PREFIX")

        if os.getenv("ABBREVIATOR_STORE_PATH"):
            self.cache.store_path = os.getenv("ABBREVIATOR_STORE_PATH")

        if os.getenv("ABBREVIATOR_CACHE", "").lower() in ("false", "0", "no"):
            self.cache.enabled = False

        if os.getenv("ABBREVIATOR_DEBUG", "").lower() in ("true", "1", "yes"):
            self.debug = True
            self.log_level = "DEBUG"

    @classmethod
    def load_from_file(cls, config_path: str) -> 'AbbreviatorConfig':
        """Load configuration from YAML file"""
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}

            cache = CacheConfig(**config_data.get('cache', {}))
            config = cls(cache=cache)

            # Override other settings
            for key, value in config_data.items():
                if key != 'cache' and hasattr(config, key):
                    setattr(config, key, value)

            # the environment still wins over the file
            config._load_env_overrides()
            return config

        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")

    def save_to_file(self, config_path: str):
        """Save configuration to YAML file"""
        config_data = {
            'cache': {
                'enabled': self.cache.enabled,
                'store_path': self.cache.store_path,
                'watched_files': list(self.cache.watched_files),
            },
            'option_prefix': self.option_prefix,
            'abbreviations_file': self.abbreviations_file,
            'log_level': self.log_level,
            'debug': self.debug,
        }

        with open(config_path, 'w') as f:
            yaml.dump(config_data, f, default_flow_style=False, indent=2)


# Default global configuration instance
default_config = AbbreviatorConfig()
