"""
NLP Configuration Module
========================
Centralized configuration for external language-service integrations.

Configuration can be set via:
1. Environment variables (NLP_LANGUAGETOOL_ENABLED=false)
2. Config file (nlp_config.json)

Defaults talk to the public LanguageTool endpoint with a 5 second timeout.
"""

import os
import json
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from config_logging import ConfigurationError, get_logger

__version__ = "1.0.0"

_logger = get_logger('nlp.config')

# Default configuration path
CONFIG_FILE = Path(__file__).parent.parent / "nlp_config.json"

DEFAULT_API_URL = "https://api.languagetool.org/v2/check"


@dataclass
class LanguageToolConfig:
    """LanguageTool HTTP API configuration."""
    enabled: bool = True
    language: str = "en-US"
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = 5.0
    max_issues: int = 12

    def validate(self):
        """Raise ConfigurationError for values the client cannot work with."""
        try:
            timeout = float(self.timeout_seconds)
        except (TypeError, ValueError):
            timeout = 0.0
        if timeout <= 0:
            raise ConfigurationError(
                f"timeout_seconds must be a positive number, got {self.timeout_seconds!r}",
                field='languagetool.timeout_seconds',
            )
        if not isinstance(self.max_issues, int) or self.max_issues < 0:
            raise ConfigurationError(
                f"max_issues must be a non-negative integer, got {self.max_issues!r}",
                field='languagetool.max_issues',
            )
        if not self.api_url:
            raise ConfigurationError("api_url must not be empty", field='languagetool.api_url')


@dataclass
class NLPConfig:
    """Master NLP configuration."""
    languagetool: LanguageToolConfig = field(default_factory=LanguageToolConfig)


# Global configuration instance
_config: Optional[NLPConfig] = None


def get_config() -> NLPConfig:
    """Get the global NLP configuration."""
    global _config
    if _config is None:
        _config = _load_config()
    return _config


def _load_config(path: Optional[Path] = None) -> NLPConfig:
    """Load configuration from file and environment."""
    config = NLPConfig()
    path = path or CONFIG_FILE

    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _apply_dict_to_config(config, file_config)
        except (json.JSONDecodeError, OSError) as e:
            _logger.warning(f"Could not load NLP config file: {e}", path=str(path))

    _apply_env_to_config(config)

    try:
        config.languagetool.validate()
    except ConfigurationError as e:
        _logger.warning(f"Invalid LanguageTool settings, using defaults: {e.message}", **e.details)
        config.languagetool = LanguageToolConfig()

    return config


def _apply_dict_to_config(config: NLPConfig, data: Dict[str, Any]):
    """Apply dictionary values to config object."""
    if not isinstance(data, dict):
        return
    for section_name, section_data in data.items():
        if hasattr(config, section_name) and isinstance(section_data, dict):
            section = getattr(config, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)


def _apply_env_to_config(config: NLPConfig):
    """Apply environment variables to config."""
    env_mappings = {
        'NLP_LANGUAGETOOL_ENABLED': ('languagetool', 'enabled', _parse_bool),
        'NLP_LANGUAGETOOL_LANGUAGE': ('languagetool', 'language', str),
        'NLP_LANGUAGETOOL_API_URL': ('languagetool', 'api_url', str),
        'NLP_LANGUAGETOOL_TIMEOUT': ('languagetool', 'timeout_seconds', float),
        'NLP_LANGUAGETOOL_MAX_ISSUES': ('languagetool', 'max_issues', int),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                section_obj = getattr(config, section)
                setattr(section_obj, key, converter(value))
            except (ValueError, AttributeError) as e:
                _logger.warning(f"Invalid env var {env_var}={value}: {e}")


def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.strip().lower() in ('true', '1', 'yes', 'on')


def is_enabled(module_name: str) -> bool:
    """Check if a module is enabled."""
    config = get_config()
    if hasattr(config, module_name):
        section = getattr(config, module_name)
        return getattr(section, 'enabled', False)
    return False


def reset_config():
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None
