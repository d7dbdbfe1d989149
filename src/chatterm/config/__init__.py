"""Configuration module for chatterm.

Provides validated settings merged from defaults, a YAML file and the environment.
"""

from .loader import ENV_PREFIX, SettingsError, find_config_file, load_settings
from .models import LLMSettings, RequestPolicy, Settings, StorageSettings, UISettings

__all__ = [
    "ENV_PREFIX",
    "LLMSettings",
    "RequestPolicy",
    "Settings",
    "SettingsError",
    "StorageSettings",
    "UISettings",
    "find_config_file",
    "load_settings",
]
