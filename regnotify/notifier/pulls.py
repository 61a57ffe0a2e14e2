"""Locate the open pull request for a branch."""

import logging

from ..github.client import GitHubClient
from .models import PullRequestRef

logger = logging.getLogger(__name__)


class PullRequestLocator:
    """Look up pull requests by head ``owner:branch``.

    Client errors propagate so callers can tell "no pull request" from
    "could not check".
    """

    def __init__(self, client: GitHubClient):
        self.client = client

    async def find_open_pull_request(
        self, owner: str, repository: str, branch_name: str
    ) -> PullRequestRef | None:
        """Return the first open pull request for the branch, or ``None``."""
        pulls = await self.client.list_pulls(
            owner, repository, head=f"{owner}:{branch_name}", state="open"
        )
        if not pulls:
            return None

        first = pulls[0]
        logger.debug(f"Found {len(pulls)} pull request(s) for {owner}:{branch_name}")
        return PullRequestRef(
            number=int(first["number"]),
            title=first.get("title") or "",
            html_url=first.get("html_url"),
        )
