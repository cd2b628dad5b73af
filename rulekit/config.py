"""
Configuration Management System for rulekit
Handles environment-based configuration and DSL defaults.
"""
import os
import json
from typing import Optional, Dict, Any
from pathlib import Path
from dataclasses import dataclass, field
from dotenv import load_dotenv

from rulekit.exceptions import ConfigurationError

# Load .env file
load_dotenv()

SUPPORTED_SYNTAXES = ("expression", "jmespath", "natural", "mongo", "graphql", "sql", "ldap")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SystemConfig:
    """System-wide configuration settings."""
    environment: str = "development"
    log_level: str = "INFO"
    version: str = "1.0.0"


@dataclass
class DSLConfig:
    """Rule compilation settings shared by all front-ends."""
    default_syntax: str = "expression"
    field_separator: str = "."
    max_depth: int = 64


@dataclass
class RulekitConfig:
    """Complete configuration for rulekit."""
    system: SystemConfig = field(default_factory=SystemConfig)
    dsl: DSLConfig = field(default_factory=DSLConfig)

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.system.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.system.log_level}",
                component="ConfigManager"
            )

        if self.dsl.default_syntax not in SUPPORTED_SYNTAXES:
            raise ConfigurationError(
                f"Unsupported default syntax: {self.dsl.default_syntax}",
                component="ConfigManager",
                context={"supported": list(SUPPORTED_SYNTAXES)}
            )

        if not self.dsl.field_separator:
            raise ConfigurationError(
                "Field separator must be a non-empty string",
                component="ConfigManager"
            )

        if self.dsl.max_depth < 1:
            raise ConfigurationError(
                f"Max depth must be positive, got {self.dsl.max_depth}",
                component="ConfigManager"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "system": {
                "environment": self.system.environment,
                "log_level": self.system.log_level,
                "version": self.system.version
            },
            "dsl": {
                "default_syntax": self.dsl.default_syntax,
                "field_separator": self.dsl.field_separator,
                "max_depth": self.dsl.max_depth
            }
        }


class ConfigManager:
    """
    Manages configuration loading from environment variables and files.
    Implements fail-fast principle for invalid configurations.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to JSON config file
        """
        self.config_path = config_path
        self._config: Optional[RulekitConfig] = None

    def load(self) -> RulekitConfig:
        """
        Load configuration from environment and optional file.
        Priority: Environment Variables > Config File > Defaults

        Returns:
            RulekitConfig: Validated configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config = RulekitConfig()

        if self.config_path:
            config = self._load_from_file(self.config_path)

        config = self._load_from_environment(config)

        config.validate()

        self._config = config
        return config

    def _load_from_file(self, file_path: str) -> RulekitConfig:
        """
        Load configuration from JSON file.

        Args:
            file_path: Path to configuration file

        Returns:
            RulekitConfig: Configuration object

        Raises:
            ConfigurationError: If file cannot be loaded
        """
        path = Path(file_path)
        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {file_path}",
                component="ConfigManager"
            )

        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in configuration file: {e}",
                component="ConfigManager"
            )

        config = RulekitConfig()

        if 'system' in data:
            sys_data = data['system']
            config.system.environment = sys_data.get('environment', 'development')
            config.system.log_level = sys_data.get('log_level', 'INFO').upper()

        if 'dsl' in data:
            dsl_data = data['dsl']
            config.dsl.default_syntax = dsl_data.get('default_syntax', 'expression')
            config.dsl.field_separator = dsl_data.get('field_separator', '.')
            config.dsl.max_depth = dsl_data.get('max_depth', 64)

        return config

    def _load_from_environment(self, config: RulekitConfig) -> RulekitConfig:
        """
        Override configuration with environment variables.

        Args:
            config: Base configuration to override

        Returns:
            RulekitConfig: Configuration with environment overrides
        """
        config.system.environment = os.getenv('RULEKIT_ENVIRONMENT', config.system.environment)

        log_level = os.getenv('RULEKIT_LOG_LEVEL')
        if log_level:
            config.system.log_level = log_level.upper()

        syntax = os.getenv('RULEKIT_DEFAULT_SYNTAX')
        if syntax:
            config.dsl.default_syntax = syntax.lower()

        separator = os.getenv('RULEKIT_FIELD_SEPARATOR')
        if separator:
            config.dsl.field_separator = separator

        max_depth = os.getenv('RULEKIT_MAX_DEPTH')
        if max_depth:
            try:
                config.dsl.max_depth = int(max_depth)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid RULEKIT_MAX_DEPTH: {max_depth}",
                    component="ConfigManager"
                )

        return config

    @property
    def config(self) -> RulekitConfig:
        """
        Get current configuration.

        Raises:
            ConfigurationError: If configuration not loaded
        """
        if self._config is None:
            raise ConfigurationError(
                "Configuration not loaded. Call load() first.",
                component="ConfigManager"
            )
        return self._config


def load_config(config_path: Optional[str] = None) -> RulekitConfig:
    """
    Load and validate configuration.

    Args:
        config_path: Optional path to configuration file

    Returns:
        RulekitConfig: Validated configuration
    """
    return ConfigManager(config_path).load()
