"""Configuration loading for the GitHub notifier.

Options are read from a reg-suit configuration file (``regconfig.json``) or
from a standalone YAML/JSON file holding just the options block. Since JSON
is a subset of YAML both are parsed with ``yaml.safe_load``.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationFileError, ConfigurationValidationError
from .models import NotifierOptions, NotifierSettings

logger = logging.getLogger(__name__)

PLUGIN_NAME = "reg-notify-github-plugin"


def _read_document(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ConfigurationFileError(
            f"Configuration file not found: {config_path}", file_path=str(config_path)
        )

    if not config_path.is_file():
        raise ConfigurationFileError(
            f"Configuration path is not a file: {config_path}",
            file_path=str(config_path),
        )

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationFileError(
            f"Failed to parse configuration: {e}", file_path=str(config_path)
        ) from e
    except OSError as e:
        raise ConfigurationFileError(
            f"Failed to read configuration file: {e}", file_path=str(config_path)
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationFileError(
            "Configuration root must be a mapping", file_path=str(config_path)
        )
    return data


def extract_plugin_options(document: dict[str, Any]) -> dict[str, Any]:
    """Return the notifier's options block from a configuration document.

    A document with a ``plugins`` section is treated as a full reg-suit
    configuration; anything else is taken as the options block itself.
    """
    if "plugins" not in document:
        return document

    plugins = document.get("plugins") or {}
    if PLUGIN_NAME not in plugins:
        raise ConfigurationValidationError(
            f"Plugin '{PLUGIN_NAME}' is not configured",
            details={"plugins": sorted(plugins)},
        )
    return plugins[PLUGIN_NAME] or {}


def load_options_from_dict(config_data: dict[str, Any]) -> NotifierOptions:
    """Validate an options mapping.

    Raises:
        ConfigurationValidationError: If validation fails
    """
    try:
        return NotifierOptions.model_validate(config_data)
    except ValidationError as e:
        raise ConfigurationValidationError(
            f"Configuration validation failed: {e}",
            validation_errors=e.errors(),
        ) from e


def load_options_file(config_path: str | Path) -> NotifierOptions:
    """Load notifier options from a configuration file.

    Raises:
        ConfigurationFileError: If the file cannot be read or parsed
        ConfigurationValidationError: If the options are invalid
    """
    config_path = Path(config_path)
    document = _read_document(config_path)
    options = load_options_from_dict(extract_plugin_options(document))
    logger.debug(f"Loaded notifier options from {config_path.resolve()}")
    return options


def load_settings(config_path: str | Path) -> NotifierSettings:
    """Load a configuration file and resolve it into notifier settings."""
    return NotifierSettings.from_options(load_options_file(config_path))
