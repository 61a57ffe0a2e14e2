"""Notification core: HEAD detection, outcome, comment rendering and delivery."""

from .comment import render_comment
from .errors import classify_remote_error
from .head import HeadResolver, find_git_dir
from .models import (
    CommentPayload,
    CommitState,
    ComparisonCounts,
    ComparisonOutcome,
    ComparisonResult,
    HeadKind,
    NotifyResult,
    PullRequestRef,
    RemoteAction,
    RemoteApiError,
    RemoteFailure,
    RepositoryHead,
    UnknownError,
)
from .outcome import FAILED_DESCRIPTION, PASSED_DESCRIPTION, classify_outcome
from .plugin import STATUS_CONTEXT, GitHubNotifierPlugin, build_auth, build_client
from .pulls import PullRequestLocator

__all__ = [
    "FAILED_DESCRIPTION",
    "PASSED_DESCRIPTION",
    "STATUS_CONTEXT",
    "CommentPayload",
    "CommitState",
    "ComparisonCounts",
    "ComparisonOutcome",
    "ComparisonResult",
    "GitHubNotifierPlugin",
    "HeadKind",
    "HeadResolver",
    "NotifyResult",
    "PullRequestLocator",
    "PullRequestRef",
    "RemoteAction",
    "RemoteApiError",
    "RemoteFailure",
    "RepositoryHead",
    "UnknownError",
    "build_auth",
    "build_client",
    "classify_outcome",
    "classify_remote_error",
    "find_git_dir",
    "render_comment",
]
