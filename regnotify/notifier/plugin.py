"""GitHub notifier: commit status and pull request comment for a comparison.

The notifier resolves HEAD, classifies the comparison, then runs two
independent phases concurrently:

* commit status: ``POST /repos/{owner}/{repo}/statuses/{sha}``
* pull request comment: find the open PR for the branch, render the body,
  ``POST /repos/{owner}/{repo}/issues/{number}/comments``

Failures in either phase are classified, logged and returned in the
``NotifyResult``; ``notify`` itself does not raise for remote errors.

The comment behavior tag (``default``/``once``/``new``) is carried in the
comment payload for the receiving side. It does not change what this module
does: a comment is always posted when a pull request is found.
"""

import asyncio
import contextlib
import logging
from collections.abc import Mapping
from typing import Any

from rich.console import Console

from ..config.loader import load_options_from_dict
from ..config.models import NotifierOptions, NotifierSettings
from ..github.auth import AuthProvider, GitHubAppAuth, PersonalAccessTokenAuth
from ..github.client import GitHubClient, GitHubClientConfig
from .comment import render_comment
from .errors import classify_remote_error, log_remote_failure
from .head import HeadResolver
from .models import (
    CommentPayload,
    ComparisonOutcome,
    ComparisonResult,
    HeadKind,
    NotifyResult,
    RemoteAction,
    RemoteFailure,
    RepositoryHead,
)
from .outcome import classify_outcome
from .pulls import PullRequestLocator

STATUS_CONTEXT = "regression-tests"


def build_auth(settings: NotifierSettings) -> AuthProvider | None:
    """Pick the authentication provider for the configured credentials."""
    if settings.app_id and settings.private_key and settings.target.installation_id:
        return GitHubAppAuth(
            app_id=settings.app_id,
            private_key=settings.private_key,
            installation_id=settings.target.installation_id,
            base_url=settings.api_base_url,
        )
    if settings.token:
        return PersonalAccessTokenAuth(settings.token)
    return None


def build_client(settings: NotifierSettings) -> GitHubClient:
    return GitHubClient(
        auth=build_auth(settings),
        config=GitHubClientConfig(base_url=settings.api_base_url),
    )


class GitHubNotifierPlugin:
    """Report a comparison result to GitHub."""

    def __init__(
        self,
        settings: NotifierSettings,
        *,
        no_emit: bool = False,
        logger: logging.Logger | None = None,
        client: GitHubClient | None = None,
        head_resolver: HeadResolver | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize the notifier.

        Args:
            settings: Resolved notifier settings
            no_emit: Dry run; compute everything but skip commit status and
                comment creation
            logger: Logger to report progress to
            client: GitHub client, built from ``settings`` when omitted
            head_resolver: HEAD reader, defaults to the repository of the
                working directory
            console: Console used for the progress spinner
        """
        self.settings = settings
        self.no_emit = no_emit
        self.logger = logger or logging.getLogger(__name__)
        self.client = client or build_client(settings)
        self.head_resolver = head_resolver or HeadResolver.from_cwd()
        self.pull_requests = PullRequestLocator(self.client)
        self.console = console or Console(stderr=True)

    @classmethod
    def from_options(
        cls, options: NotifierOptions | Mapping[str, Any], **kwargs: Any
    ) -> "GitHubNotifierPlugin":
        """Create a notifier from a raw or validated options block."""
        if not isinstance(options, NotifierOptions):
            options = load_options_from_dict(dict(options))
        return cls(NotifierSettings.from_options(options), **kwargs)

    async def __aenter__(self) -> "GitHubNotifierPlugin":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the HTTP session."""
        await self.client.close()

    def _progress(self) -> contextlib.AbstractContextManager[Any]:
        if self.no_emit:
            return contextlib.nullcontext()
        return self.console.status("Sending notification to GitHub...")

    async def notify(
        self,
        comparison_result: ComparisonResult | Mapping[str, Any],
        report_url: str | None = None,
    ) -> NotifyResult:
        """Update the commit status and comment on the pull request.

        Args:
            comparison_result: Comparison result or its ``out.json`` mapping
            report_url: Link to the published report

        Returns:
            NotifyResult with the collected remote failures
        """
        if not isinstance(comparison_result, ComparisonResult):
            comparison_result = ComparisonResult.from_dict(comparison_result)
        report_url = report_url or None

        head = self.head_resolver.resolve()
        if head.kind is HeadKind.UNRESOLVED:
            self.logger.error("Can't detect HEAD branch or commit.")
            return NotifyResult(head=head, dry_run=self.no_emit)

        outcome = classify_outcome(comparison_result.counts())
        self.logger.debug(
            f"Comparison outcome for {head.commit_id}: {outcome.state.value}"
        )

        with self._progress():
            (status_updated, status_failures), (
                pr_number,
                comment_body,
                comment_failures,
            ) = await asyncio.gather(
                self._update_commit_status(head, outcome, report_url),
                self._comment_on_pull_request(head, outcome, report_url),
            )

        return NotifyResult(
            failures=[*status_failures, *comment_failures],
            head=head,
            outcome=outcome,
            status_updated=status_updated,
            commented_pull_request=pr_number,
            comment_body=comment_body,
            dry_run=self.no_emit,
        )

    def _failure(self, action: RemoteAction, exc: Exception) -> RemoteFailure:
        failure = classify_remote_error(action, exc)
        log_remote_failure(failure, self.logger)
        return failure

    async def _update_commit_status(
        self,
        head: RepositoryHead,
        outcome: ComparisonOutcome,
        report_url: str | None,
    ) -> tuple[bool, list[RemoteFailure]]:
        if not self.settings.policy.set_commit_status:
            return False, []

        target = self.settings.target
        sha = head.commit_id or ""
        if self.no_emit:
            self.logger.info(
                f"Dry run: would set commit status {outcome.state.value} on {sha}."
            )
            return False, []

        try:
            await self.client.create_commit_status(
                owner=target.owner,
                repo=target.repository,
                sha=sha,
                state=outcome.state.value,
                description=outcome.description,
                context=STATUS_CONTEXT,
                target_url=report_url,
            )
        except Exception as e:
            return False, [self._failure(RemoteAction.COMMIT_STATUS, e)]

        self.logger.info(f"Updated commit status for {sha} .")
        return True, []

    async def _comment_on_pull_request(
        self,
        head: RepositoryHead,
        outcome: ComparisonOutcome,
        report_url: str | None,
    ) -> tuple[int | None, str | None, list[RemoteFailure]]:
        policy = self.settings.policy
        if not policy.post_comment:
            return None, None, []

        if not head.is_branch or not head.branch_name:
            self.logger.warning("HEAD is not attached into any branches.")
            return None, None, []

        target = self.settings.target
        try:
            pull_request = await self.pull_requests.find_open_pull_request(
                target.owner, target.repository, head.branch_name
            )
        except Exception as e:
            return None, None, [self._failure(RemoteAction.PULL_REQUEST_LOOKUP, e)]

        if pull_request is None:
            self.logger.warning(f"No pull request found for branch {head.branch_name}.")
            return None, None, []

        payload = CommentPayload(
            target=target,
            counts=outcome.counts,
            head_commit_id=head.commit_id or "",
            branch_name=head.branch_name,
            report_url=report_url,
            behavior=policy.comment_behavior,
            short_description=policy.short_description,
            config_id=policy.config_id,
        )
        body = render_comment(payload)
        self.logger.debug(
            f"Comment payload for PR #{pull_request.number}: "
            f"behavior={payload.behavior.value}, report_url={report_url}"
        )

        if self.no_emit:
            self.logger.info(
                f"Dry run: would comment on PR {target.full_name}#{pull_request.number}."
            )
            return None, body, []

        try:
            await self.client.create_issue_comment(
                target.owner, target.repository, pull_request.number, body
            )
        except Exception as e:
            return None, body, [self._failure(RemoteAction.PULL_REQUEST_COMMENT, e)]

        self.logger.info(f"Commented on PR {target.full_name}#{pull_request.number} .")
        return pull_request.number, body, []
