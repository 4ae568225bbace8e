"""
Validation Export Configuration

This module provides configuration loading for the Management API client and
the export run. Configuration is loaded with the following precedence:
1. Environment variables (highest priority)
2. Config file values (.kontent-validation/config.yaml)
3. Default values (lowest priority)

The CLI builds one ExportConfig per invocation and passes it explicitly to
the client and the orchestrator; nothing is stored at module level.

Usage:
    >>> from validation_export.config import ExportConfig
    >>>
    >>> config = ExportConfig.load_from_yaml('.kontent-validation/config.yaml')
    >>> config.validate()
    >>> print(config.csv_path)
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from validation_export.errors import ConfigurationError


DEFAULT_CONFIG_PATH = ".kontent-validation/config.yaml"
CONFIG_SECTION = "validation_export"


class EnvironmentVariables:
    """Centralized environment variable names."""

    ENVIRONMENT_ID = "KONTENT_ENVIRONMENT_ID"
    MANAGEMENT_API_KEY = "KONTENT_MANAGEMENT_API_KEY"
    MANAGEMENT_BASE_URL = "KONTENT_MANAGEMENT_BASE_URL"
    REQUEST_TIMEOUT = "KONTENT_REQUEST_TIMEOUT"

    EXPORT_FILENAME = "VALIDATION_EXPORT_FILENAME"
    OUTPUT_DIR = "VALIDATION_EXPORT_OUTPUT_DIR"
    POLL_INTERVAL = "VALIDATION_POLL_INTERVAL"
    MAX_ATTEMPTS = "VALIDATION_MAX_ATTEMPTS"
    TIMEOUT = "VALIDATION_TIMEOUT"
    LOG_LEVEL = "VALIDATION_EXPORT_LOG_LEVEL"
    CONFIG_PATH = "VALIDATION_EXPORT_CONFIG"

    @classmethod
    def get_variable_documentation(cls) -> Dict[str, str]:
        """Get documentation for all environment variables."""
        return {
            cls.ENVIRONMENT_ID: "Environment (project) id to validate",
            cls.MANAGEMENT_API_KEY: "Management API key with permission to validate the environment",
            cls.MANAGEMENT_BASE_URL: "Management API base URL (default: https://manage.kontent.ai/v2)",
            cls.REQUEST_TIMEOUT: "HTTP request timeout in seconds (default: 60)",
            cls.EXPORT_FILENAME: "Base filename for the .csv and .json exports (default: validation-issues)",
            cls.OUTPUT_DIR: "Directory the export files are written to (default: current directory)",
            cls.POLL_INTERVAL: "Seconds between validation status checks (default: 3)",
            cls.MAX_ATTEMPTS: "Maximum number of status checks (default: unbounded)",
            cls.TIMEOUT: "Maximum seconds to wait for the validation task (default: unbounded)",
            cls.LOG_LEVEL: "Logging level (debug, info, warning, error)",
            cls.CONFIG_PATH: "Path to the YAML configuration file",
        }


@dataclass
class ManagementConfig:
    """Configuration for the Management API client.

    Attributes:
        environment_id: Id of the environment to validate
        api_key: Management API key (sent as a bearer token)
        base_url: Management API base URL
        timeout: Request timeout in seconds
    """
    environment_id: str = ""
    api_key: str = ""
    base_url: str = "https://manage.kontent.ai/v2"
    timeout: int = 60


@dataclass
class ExportConfig:
    """Complete configuration for one validation export run.

    Attributes:
        management: Management API client configuration
        export_filename: Base filename shared by the CSV and JSON exports
        output_dir: Directory the export files are written to
        poll_interval: Seconds between validation status checks
        max_attempts: Maximum number of status checks (None = unbounded)
        timeout: Maximum seconds to wait for the task (None = unbounded)
        log_level: Logging level for the console
    """
    management: ManagementConfig = field(default_factory=ManagementConfig)
    export_filename: str = "validation-issues"
    output_dir: str = "."
    poll_interval: float = 3.0
    max_attempts: Optional[int] = None
    timeout: Optional[float] = None
    log_level: str = "info"

    @property
    def csv_path(self) -> Path:
        return Path(self.output_dir) / f"{self.export_filename}.csv"

    @property
    def json_path(self) -> Path:
        return Path(self.output_dir) / f"{self.export_filename}.json"

    @classmethod
    def load_from_yaml(cls, config_path: Optional[str] = None) -> 'ExportConfig':
        """Load configuration from a YAML file.

        A missing file is not an error: environment variables and defaults
        still apply.

        Args:
            config_path: Path to config YAML file
                (default: $VALIDATION_EXPORT_CONFIG or .kontent-validation/config.yaml)

        Returns:
            ExportConfig instance

        Raises:
            ConfigurationError: If the file is not valid YAML or references
                an unset environment variable
        """
        if config_path is None:
            config_path = os.getenv(EnvironmentVariables.CONFIG_PATH, DEFAULT_CONFIG_PATH)

        section: Dict[str, Any] = {}
        config_file = Path(config_path)
        if config_file.exists():
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"Configuration file {config_file} must contain a mapping"
                )
            section = data.get(CONFIG_SECTION, data)

        return cls.load_from_dict(substitute_environment_variables(section))

    @classmethod
    def load_from_dict(cls, section: Dict[str, Any]) -> 'ExportConfig':
        """Load configuration from a dictionary.

        Precedence (highest to lowest): environment variables, dict values,
        defaults.

        Example:
            >>> config = ExportConfig.load_from_dict(
            ...     {'management': {'environment_id': 'abc'}, 'export_filename': 'issues'}
            ... )
        """
        env = EnvironmentVariables
        management = section.get('management') or {}

        try:
            management_config = ManagementConfig(
                environment_id=cls._resolve_value(
                    management.get('environment_id'), env.ENVIRONMENT_ID, ''
                ),
                api_key=cls._resolve_value(
                    management.get('api_key'), env.MANAGEMENT_API_KEY, ''
                ),
                base_url=cls._resolve_value(
                    management.get('base_url'), env.MANAGEMENT_BASE_URL,
                    'https://manage.kontent.ai/v2'
                ).rstrip('/'),
                timeout=int(cls._resolve_value(
                    management.get('timeout'), env.REQUEST_TIMEOUT, 60
                )),
            )

            max_attempts = cls._resolve_value(
                section.get('max_attempts'), env.MAX_ATTEMPTS, None
            )
            timeout = cls._resolve_value(section.get('timeout'), env.TIMEOUT, None)

            return cls(
                management=management_config,
                export_filename=cls._resolve_value(
                    section.get('export_filename'), env.EXPORT_FILENAME, 'validation-issues'
                ),
                output_dir=cls._resolve_value(
                    section.get('output_dir'), env.OUTPUT_DIR, '.'
                ),
                poll_interval=float(cls._resolve_value(
                    section.get('poll_interval'), env.POLL_INTERVAL, 3.0
                )),
                max_attempts=int(max_attempts) if max_attempts not in (None, '') else None,
                timeout=float(timeout) if timeout not in (None, '') else None,
                log_level=cls._resolve_value(
                    section.get('log_level'), env.LOG_LEVEL, 'info'
                ),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e

    @staticmethod
    def _resolve_value(config_value: Any, env_var: str, default: Any) -> Any:
        """Resolve configuration value with precedence: ENV > Config > Default."""
        env_value = os.getenv(env_var)
        if env_value is not None:
            return env_value

        if config_value is not None:
            return config_value

        return default

    def validate(self) -> None:
        """Check that the configuration can drive a run.

        Raises:
            ConfigurationError: Listing every problem found
        """
        errors: List[str] = []

        if not self.management.environment_id:
            errors.append(
                "Environment id not configured. "
                f"Set {EnvironmentVariables.ENVIRONMENT_ID} or management.environment_id."
            )
        if not self.management.api_key:
            errors.append(
                "Management API key not configured. "
                f"Set {EnvironmentVariables.MANAGEMENT_API_KEY} or management.api_key."
            )
        if self.management.timeout <= 0:
            errors.append(f"Request timeout must be positive, got {self.management.timeout}")
        if not self.export_filename:
            errors.append("Export filename must not be empty")
        if self.poll_interval < 0:
            errors.append(f"Poll interval must not be negative, got {self.poll_interval}")
        if self.max_attempts is not None and self.max_attempts < 1:
            errors.append(f"Max attempts must be at least 1, got {self.max_attempts}")
        if self.timeout is not None and self.timeout <= 0:
            errors.append(f"Timeout must be positive, got {self.timeout}")

        if errors:
            raise ConfigurationError("; ".join(errors))

    def to_log_dict(self) -> Dict[str, Any]:
        """Flatten the configuration for debug logging."""
        return {
            "environment_id": self.management.environment_id,
            "api_key": self.management.api_key,
            "base_url": self.management.base_url,
            "request_timeout": self.management.timeout,
            "export_filename": self.export_filename,
            "output_dir": self.output_dir,
            "poll_interval": self.poll_interval,
            "max_attempts": self.max_attempts,
            "timeout": self.timeout,
        }


def substitute_environment_variables(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Substitute ${VAR} and ${VAR:-default} syntax with environment variable values.

    Raises:
        ConfigurationError: If a referenced environment variable is missing
    """
    pattern = re.compile(r'\$\{([^}]+)\}')

    def replace_var(match):
        var_expr = match.group(1)
        if ':-' in var_expr:
            var_name, default_value = var_expr.split(':-', 1)
            return os.environ.get(var_name, default_value)
        if var_expr not in os.environ:
            raise ConfigurationError(
                f"Required environment variable '{var_expr}' is not set"
            )
        return os.environ[var_expr]

    def substitute_recursive(obj):
        if isinstance(obj, dict):
            return {k: substitute_recursive(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [substitute_recursive(item) for item in obj]
        elif isinstance(obj, str):
            return pattern.sub(replace_var, obj)
        return obj

    return substitute_recursive(config_dict)
