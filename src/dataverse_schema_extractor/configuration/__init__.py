"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, ConfigurationOverrides, load_configuration
from .runtime_settings import (
    AuthSettings,
    Configuration,
    EnvironmentSettings,
    ExtractionSettings,
    OutputFormat,
    OutputSettings,
)

__all__ = [
    "AuthSettings",
    "Configuration",
    "EnvironmentSettings",
    "ExtractionSettings",
    "OutputFormat",
    "OutputSettings",
    "ConfigurationError",
    "ConfigurationOverrides",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
