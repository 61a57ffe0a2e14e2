"""GitHub API client for commit statuses, pull requests and comments."""

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any

import aiohttp

from .auth import DEFAULT_API_BASE_URL, AuthProvider
from .exceptions import (
    GitHubAuthenticationError,
    GitHubConnectionError,
    GitHubError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubServerError,
    GitHubTimeoutError,
    GitHubValidationError,
)

logger = logging.getLogger(__name__)


@dataclass
class GitHubClientConfig:
    """Configuration for GitHub client."""

    base_url: str = DEFAULT_API_BASE_URL
    timeout: int = 30
    user_agent: str = "reg-notify-github/1.0"


class GitHubClient:
    """Async GitHub API client.

    Every request is attempted exactly once; failures surface as
    :class:`GitHubError` subclasses and retrying is left to the caller.
    """

    def __init__(
        self,
        auth: AuthProvider | None = None,
        config: GitHubClientConfig | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            auth: Authentication provider, ``None`` for anonymous requests
            config: Client configuration
        """
        self.auth = auth
        self.config = config or GitHubClientConfig()

        # HTTP session will be initialized on first use
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> None:
        """Ensure HTTP session is initialized."""
        if self._session is None or self._session.closed:
            async with self._session_lock:
                if self._session is None or self._session.closed:
                    self._session = aiohttp.ClientSession(
                        timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                        headers={
                            "User-Agent": self.config.user_agent,
                            "Accept": "application/vnd.github.v3+json",
                            "X-GitHub-Api-Version": "2022-11-28",
                        },
                    )

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        """Make a single HTTP request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: API path
            params: Query parameters
            data: Request body data

        Returns:
            Decoded JSON response, ``None`` for empty bodies

        Raises:
            GitHubError: Various GitHub API errors
        """
        correlation_id = str(uuid.uuid4())[:8]
        url = self._url(path)

        request_headers: dict[str, str] = {}
        if self.auth is not None:
            auth_token = await self.auth.get_token()
            request_headers.update(auth_token.to_header())

        await self._ensure_session()
        if not self._session:
            raise GitHubConnectionError("Failed to initialize HTTP session")

        request_kwargs: dict[str, Any] = {
            "params": params,
            "headers": request_headers,
        }
        if data is not None:
            request_kwargs["json"] = data

        start_time = time.time()
        logger.debug(f"GitHub API request [{correlation_id}] {method} {url}")

        try:
            async with self._session.request(method, url, **request_kwargs) as response:
                logger.debug(
                    f"GitHub API response [{correlation_id}] "
                    f"{response.status} in {time.time() - start_time:.2f}s"
                )
                if response.status not in (200, 201, 204):
                    await self._handle_error_response(response, correlation_id)
                if response.status == 204:
                    return None
                return await response.json()

        except TimeoutError as e:
            raise GitHubTimeoutError(f"Request timeout for {method} {url}") from e
        except aiohttp.ClientError as e:
            raise GitHubConnectionError(
                f"Connection error for {method} {url}: {e}"
            ) from e

    async def _handle_error_response(
        self, response: aiohttp.ClientResponse, correlation_id: str
    ) -> None:
        """Handle error responses from GitHub API.

        Args:
            response: HTTP response
            correlation_id: Request correlation ID

        Raises:
            GitHubError: Appropriate error based on status code
        """
        try:
            error_data = await response.json()
        except (json.JSONDecodeError, aiohttp.ContentTypeError):
            error_data = {"message": await response.text()}
        if not isinstance(error_data, dict):
            error_data = {"message": str(error_data)}

        error_message = error_data.get("message") or f"HTTP {response.status}"

        logger.warning(
            f"GitHub API error [{correlation_id}] {response.status}: {error_message}"
        )

        if response.status == 401:
            raise GitHubAuthenticationError(error_message, response.status, error_data)
        elif response.status == 403:
            if "rate limit" in error_message.lower():
                reset_time = response.headers.get("X-RateLimit-Reset")
                raise GitHubRateLimitError(
                    error_message,
                    status_code=response.status,
                    reset_time=int(reset_time) if reset_time else None,
                    remaining=int(response.headers.get("X-RateLimit-Remaining", "0")),
                    limit=int(response.headers.get("X-RateLimit-Limit", "0")),
                )
            raise GitHubAuthenticationError(error_message, response.status, error_data)
        elif response.status == 404:
            raise GitHubNotFoundError(error_message, response.status, error_data)
        elif response.status == 422:
            raise GitHubValidationError(error_message, response.status, error_data)
        elif 500 <= response.status < 600:
            raise GitHubServerError(error_message, response.status, error_data)
        else:
            raise GitHubError(error_message, response.status, error_data)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make GET request to GitHub API."""
        return await self._request("GET", path, params=params)

    async def post(
        self,
        path: str,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make POST request to GitHub API."""
        return await self._request("POST", path, params=params, data=data)

    async def create_commit_status(
        self,
        owner: str,
        repo: str,
        sha: str,
        state: str,
        description: str,
        context: str,
        target_url: str | None = None,
    ) -> dict[str, Any]:
        """Create a commit status.

        Args:
            owner: Repository owner
            repo: Repository name
            sha: Commit SHA
            state: One of error, failure, pending, success
            description: Short status description
            context: Status context label
            target_url: Link shown next to the status

        Returns:
            Created status data
        """
        body: dict[str, Any] = {
            "state": state,
            "description": description,
            "context": context,
        }
        if target_url:
            body["target_url"] = target_url
        result: dict[str, Any] = await self.post(
            f"/repos/{owner}/{repo}/statuses/{sha}", data=body
        )
        return result

    async def list_pulls(
        self,
        owner: str,
        repo: str,
        head: str | None = None,
        state: str = "open",
    ) -> list[dict[str, Any]]:
        """List pull requests for a repository.

        Args:
            owner: Repository owner
            repo: Repository name
            head: Filter by head user and branch, ``user:ref-name``
            state: PR state (open, closed, all)

        Returns:
            Pull requests in GitHub's default order
        """
        params: dict[str, Any] = {"state": state}
        if head:
            params["head"] = head
        result = await self.get(f"/repos/{owner}/{repo}/pulls", params=params)
        return list(result or [])

    async def create_issue_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> dict[str, Any]:
        """Create a comment on an issue or pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue or pull request number
            body: Markdown comment body

        Returns:
            Created comment data
        """
        result: dict[str, Any] = await self.post(
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            data={"body": body},
        )
        return result
