"""
Builds the validated run configuration from command-line options.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape

from docfetch.exceptions import ConfigNotFoundError, ConfigurationError
from docfetch.models.config import DEFAULT_PACKAGES_FILE, FetchConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles locating the packages file and validating run settings."""

    def __init__(self, config_file_path: Path | None = None):
        self.config_file_path = config_file_path or Path(DEFAULT_PACKAGES_FILE)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> FetchConfig:
        """
        Validates the packages file location and CLI overrides.

        Args:
            cli_options: A dictionary of options provided via the command line.
                Options set to None are ignored.

        Returns:
            A validated FetchConfig object.

        Raises:
            ConfigNotFoundError: If the packages file does not exist.
            ConfigurationError: If any option fails validation.
        """
        if not self.config_file_path.is_file():
            raise ConfigNotFoundError(
                f"Packages file not found at '{self.config_file_path}'."
            )

        options = {
            key: value
            for key, value in (cli_options or {}).items()
            if value is not None
        }
        try:
            config = FetchConfig(config_path=self.config_file_path, **options)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

        if not config.base_dir.is_dir():
            raise ConfigurationError(
                f"Base directory '{config.base_dir}' does not exist."
            )
        log.debug(f"Loaded configuration: {escape(repr(config))}")
        return config
