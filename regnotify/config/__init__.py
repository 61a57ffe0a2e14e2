"""Configuration management for the GitHub notifier.

Example usage:
    from regnotify.config import load_settings

    settings = load_settings("regconfig.json")
    print(settings.target.full_name)
"""

from .client_id import DecodedClientId, decode_client_id
from .exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    ConfigurationValidationError,
)
from .loader import (
    PLUGIN_NAME,
    extract_plugin_options,
    load_options_file,
    load_options_from_dict,
    load_settings,
)
from .models import (
    NotificationPolicy,
    NotificationTarget,
    NotifierOptions,
    NotifierSettings,
    PrCommentBehavior,
)

__all__ = [
    "PLUGIN_NAME",
    "ConfigurationError",
    "ConfigurationFileError",
    "ConfigurationValidationError",
    "DecodedClientId",
    "NotificationPolicy",
    "NotificationTarget",
    "NotifierOptions",
    "NotifierSettings",
    "PrCommentBehavior",
    "decode_client_id",
    "extract_plugin_options",
    "load_options_file",
    "load_options_from_dict",
    "load_settings",
]
