"""Classify exceptions raised by remote calls into failure variants."""

import logging

from ..github.exceptions import GitHubError
from .models import RemoteAction, RemoteApiError, RemoteFailure, UnknownError

logger = logging.getLogger(__name__)


def classify_remote_error(action: RemoteAction, exc: BaseException) -> RemoteFailure:
    """Map an exception to ``RemoteApiError`` or ``UnknownError``.

    Only a ``GitHubError`` with a status code counts as a structured API
    error; transport failures and anything unexpected are opaque.
    """
    if isinstance(exc, GitHubError) and exc.status_code is not None:
        return RemoteApiError(
            action=action, message=exc.message, status_code=exc.status_code
        )
    return UnknownError(action=action, cause=exc)


def log_remote_failure(failure: RemoteFailure, log: logging.Logger = logger) -> None:
    """Log a failure according to its variant."""
    if isinstance(failure, RemoteApiError):
        log.error(f"GitHub {failure.action.value} failed: {failure.message}")
    else:
        log.error(
            f"GitHub {failure.action.value} failed with an unexpected error: "
            f"{failure.message}",
            exc_info=failure.cause,
        )
