"""
Configuration management for gsvalidate.

Settings live in an optional ``settings.json`` inside the config
directory. A missing file means defaults. Secret keys are never stored
here; supplying them is the caller's job.
"""

import json
import logging
import os
from typing import Optional

from .protocol.challenge import (
    DEFAULT_CHALLENGE_LENGTH,
    DEFAULT_ALPHABET,
    check_alphabet,
    check_length,
)


logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
SETTINGS_KEYS = ("challenge_length", "challenge_alphabet", "log_level")


class ConfigError(Exception):
    """Raised when configuration operations fail."""
    pass


class GsValidateConfig:
    """
    Simple configuration manager for gsvalidate.

    Holds the challenge issuing parameters and the log level.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize configuration with defaults.

        Args:
            config_dir: Directory for configuration files. Defaults to ~/.gsvalidate/
        """
        if config_dir is None:
            config_dir = os.path.expanduser("~/.gsvalidate")

        self.config_dir = config_dir
        self.settings_path = os.path.join(config_dir, SETTINGS_FILE)

        self.challenge_length = DEFAULT_CHALLENGE_LENGTH
        self.challenge_alphabet = DEFAULT_ALPHABET
        self.log_level = DEFAULT_LOG_LEVEL

    @classmethod
    def load(cls, config_dir: Optional[str] = None) -> 'GsValidateConfig':
        """
        Create a config and apply ``settings.json`` if it exists.

        Raises:
            ConfigError: If the settings file is unreadable or invalid
        """
        config = cls(config_dir)
        if not config.settings_exist():
            return config

        try:
            with open(config.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(f"Invalid settings file {config.settings_path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to read settings: {e}")

        if not isinstance(data, dict):
            raise ConfigError("Settings file must contain a JSON object")

        unknown = sorted(set(data) - set(SETTINGS_KEYS))
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

        config.update(**data)
        logger.info(f"Loaded settings from {config.settings_path}")
        return config

    def update(self, challenge_length: Optional[int] = None,
               challenge_alphabet: Optional[str] = None,
               log_level: Optional[str] = None, **unknown) -> None:
        """
        Validate and apply settings.

        Raises:
            ConfigError: If a value is out of range or a key is unknown
        """
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")

        try:
            if challenge_length is not None:
                self.challenge_length = check_length(challenge_length)
            if challenge_alphabet is not None:
                if not isinstance(challenge_alphabet, str):
                    raise ValueError("Challenge alphabet must be a string")
                check_alphabet(challenge_alphabet)
                self.challenge_alphabet = challenge_alphabet
        except ValueError as e:
            raise ConfigError(str(e))

        if log_level is not None:
            if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
                raise ConfigError(f"Log level must be one of {', '.join(LOG_LEVELS)}")
            self.log_level = log_level.upper()

    def to_dict(self) -> dict:
        """Get the settings as a JSON-serializable dict."""
        return {
            'challenge_length': self.challenge_length,
            'challenge_alphabet': self.challenge_alphabet,
            'log_level': self.log_level,
        }

    def save(self) -> None:
        """
        Write the current settings to ``settings.json``.

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to save settings: {e}")

    def settings_exist(self) -> bool:
        """Check if a settings file exists."""
        return os.path.exists(self.settings_path)
