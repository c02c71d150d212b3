"""Configuration management for Shale.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import os
import configparser
from pathlib import Path
from typing import Optional

from .errors import ConfigError, IOFailure

DEFAULT_META_DIR = '.git'
DEFAULT_BRANCH = 'main'


class Config:
    """
    Manages Shale configuration files.
    
    Configuration is stored in INI format, similar to Git:
    - Global config: ~/.shaleconfig
    - Repository config: <metadir>/config
    
    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """
    
    GLOBAL_CONFIG_PATH = Path.home() / '.shaleconfig'
    
    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Initialize Config manager.
        
        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = repo_config_path
        self._global_config = None
        self._repo_config = None
    
    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = self._load(self.GLOBAL_CONFIG_PATH)
        return self._global_config
    
    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = self._load(self.repo_config_path)
        return self._repo_config
    
    @staticmethod
    def _load(path: Path) -> configparser.ConfigParser:
        config = configparser.ConfigParser()
        if path.exists():
            try:
                config.read(path)
            except configparser.Error as e:
                raise ConfigError(f"cannot parse config file {path}: {e}") from e
        return config
    
    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.
        
        Priority order (highest to lowest):
        1. Environment variables (SHALE_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value
        """
        env_key = f"SHALE_{section.upper()}_{key.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value
        
        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)
        
        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)
        
        return fallback
    
    def get_int(self, section: str, key: str, fallback: int) -> int:
        """Get an integer value, raising ConfigError if it does not parse."""
        value = self.get(section, key)
        if value is None:
            return fallback
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"{section}.{key} must be an integer, got '{value}'") from None
    
    @property
    def compression_level(self) -> int:
        """zlib level for stored objects (core.compression)."""
        level = self.get_int('core', 'compression', -1)
        if not -1 <= level <= 9:
            raise ConfigError(f"core.compression must be between -1 and 9, got {level}")
        return level
    
    def set(self, section: str, key: str, value: str) -> None:
        """
        Set a value in the repository config file.
        
        Raises:
            ConfigError: No repository config path is available
        """
        if not self.repo_config_path:
            raise ConfigError("No repository config path available")
        config = self.repo_config
        
        if not config.has_section(section):
            config.add_section(section)
        
        config.set(section, key, value)
        
        try:
            with open(self.repo_config_path, 'w') as f:
                config.write(f)
        except OSError as e:
            raise IOFailure(self.repo_config_path, 'write config', e.strerror) from e
