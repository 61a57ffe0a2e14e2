"""Report visual regression comparison results to GitHub.

Example usage:
    from regnotify import GitHubNotifierPlugin, load_settings

    async with GitHubNotifierPlugin(load_settings("regconfig.json")) as plugin:
        result = await plugin.notify(comparison, report_url=url)
"""

from .config import NotifierOptions, NotifierSettings, load_settings
from .notifier import ComparisonResult, GitHubNotifierPlugin, NotifyResult

__version__ = "0.1.0"

__all__ = [
    "ComparisonResult",
    "GitHubNotifierPlugin",
    "NotifierOptions",
    "NotifierSettings",
    "NotifyResult",
    "load_settings",
]
