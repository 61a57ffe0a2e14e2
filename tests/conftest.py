"""
Shared fixtures for the notifier test-suite.

Provides real throwaway git repositories, notifier settings and a mocked
GitHub client so unit tests never touch the network.
"""

import base64
import zlib
from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pygit2
import pytest

from regnotify.config.models import (
    NotificationPolicy,
    NotificationTarget,
    NotifierSettings,
)
from regnotify.github.client import GitHubClient


@pytest.fixture
def client_id_factory() -> Callable[[str, str, str], str]:
    """Build client ids the way the reg-suit GitHub app issues them."""

    def factory(owner: str, repository: str, installation_id: str) -> str:
        raw = f"gh/{repository}/{installation_id}/{owner}".encode()
        compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
        return base64.b64encode(compressor.compress(raw) + compressor.flush()).decode()

    return factory


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[..., pygit2.Repository]:
    """
    Factory for real git repositories.

    Why: HEAD resolution goes through libgit2, so tests need repositories
         libgit2 accepts rather than hand-written files
    What: Initializes a repository, optionally with one commit on a branch
    How: Uses pygit2.init_repository and commits an empty tree to HEAD
    """

    def factory(
        path: Path | None = None, branch: str = "main", commit: bool = True
    ) -> pygit2.Repository:
        repo = pygit2.init_repository(
            str(path or tmp_path), bare=False, initial_head=branch
        )
        if commit:
            signature = pygit2.Signature("Test User", "test@example.com")
            tree_id = repo.index.write_tree()
            repo.create_commit(
                "HEAD", signature, signature, "Initial commit", tree_id, []
            )
        return repo

    return factory


@pytest.fixture
def settings() -> NotifierSettings:
    """Settings with every notification feature enabled."""
    return NotifierSettings(
        target=NotificationTarget(owner="octo", repository="widgets"),
        policy=NotificationPolicy(),
        token="ghp_test_token",
    )


@pytest.fixture
def mock_client() -> Mock:
    """
    Mock GitHub client whose remote calls all succeed.

    Why: Orchestration tests assert on which remote calls happen, not on HTTP
    What: Provides AsyncMocks for status, pull request and comment endpoints
    How: Uses a spec'd Mock so typos in method names fail loudly
    """
    client = Mock(spec=GitHubClient)
    client.create_commit_status = AsyncMock(return_value={"id": 1})
    client.list_pulls = AsyncMock(
        return_value=[{"number": 42, "title": "Add widgets", "html_url": "u"}]
    )
    client.create_issue_comment = AsyncMock(return_value={"id": 7})
    client.close = AsyncMock()
    return client
