"""GitHub authentication handlers."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

import aiohttp
import jwt

from .exceptions import GitHubAuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.github.com"


@dataclass
class AuthToken:
    """Authentication token with metadata."""

    token: str
    token_type: str = "Bearer"
    expires_at: int | None = None

    @property
    def is_expired(self) -> bool:
        """Check if token is expired."""
        if self.expires_at is None:
            return False
        return time.time() >= self.expires_at

    def to_header(self) -> dict[str, str]:
        """Convert to authorization header."""
        return {"Authorization": f"{self.token_type} {self.token}"}


class AuthProvider(ABC):
    """Abstract base class for authentication providers."""

    @abstractmethod
    async def get_token(self) -> AuthToken:
        """Get authentication token."""
        pass

    @abstractmethod
    async def refresh_token(self) -> AuthToken:
        """Refresh authentication token."""
        pass


class PersonalAccessTokenAuth(AuthProvider):
    """Personal Access Token authentication provider."""

    def __init__(self, token: str):
        """Initialize PAT authentication.

        Args:
            token: GitHub Personal Access Token
        """
        if not token:
            raise GitHubAuthenticationError("Personal Access Token is required")
        self._token = AuthToken(token=token, token_type="token")  # nosec B106

    async def get_token(self) -> AuthToken:
        """Get authentication token."""
        return self._token

    async def refresh_token(self) -> AuthToken:
        """PAT tokens don't need refresh."""
        return self._token


class GitHubAppAuth(AuthProvider):
    """GitHub App installation authentication provider.

    Signs a short lived RS256 JWT with the app's private key and exchanges it
    for an installation access token, which is cached until it expires.
    """

    def __init__(
        self,
        app_id: str,
        private_key: str,
        installation_id: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: int = 30,
    ):
        """Initialize GitHub App authentication.

        Args:
            app_id: GitHub App ID
            private_key: Private key for JWT signing
            installation_id: Installation ID for the app
            base_url: GitHub API base URL
            timeout: Token exchange timeout in seconds
        """
        if not installation_id:
            raise GitHubAuthenticationError(
                "Installation ID is required for GitHub App authentication"
            )
        self.app_id = app_id
        self.private_key = private_key
        self.installation_id = installation_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._current_token: AuthToken | None = None

    def _generate_jwt(self) -> str:
        """Generate JWT for GitHub App authentication."""
        now = int(time.time())
        payload = {
            "iat": now - 60,  # clock drift allowance
            "exp": now + 600,
            "iss": self.app_id,
        }

        try:
            token = jwt.encode(payload, self.private_key, algorithm="RS256")
            return token if isinstance(token, str) else token.decode("utf-8")
        except Exception as e:
            raise GitHubAuthenticationError(f"Failed to generate JWT: {e}") from e

    async def get_token(self) -> AuthToken:
        """Get authentication token."""
        if self._current_token and not self._current_token.is_expired:
            return self._current_token

        return await self.refresh_token()

    async def refresh_token(self) -> AuthToken:
        """Exchange a fresh app JWT for an installation access token."""
        app_jwt = self._generate_jwt()
        url = (
            f"{self.base_url}/app/installations/"
            f"{self.installation_id}/access_tokens"
        )
        headers = {
            "Authorization": f"Bearer {app_jwt}",
            "Accept": "application/vnd.github.v3+json",
        }

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as session:
                async with session.post(url, headers=headers) as response:
                    data = await response.json(content_type=None)
                    if response.status != 201:
                        message = (data or {}).get("message", f"HTTP {response.status}")
                        raise GitHubAuthenticationError(
                            f"Installation token exchange failed: {message}",
                            response.status,
                            data,
                        )
        except aiohttp.ClientError as e:
            raise GitHubAuthenticationError(
                f"Installation token exchange failed: {e}"
            ) from e

        expires_at = None
        if data.get("expires_at"):
            expires_at = int(
                datetime.fromisoformat(
                    data["expires_at"].replace("Z", "+00:00")
                ).timestamp()
            )

        logger.debug(f"Obtained installation token for {self.installation_id}")
        self._current_token = AuthToken(
            token=data["token"],
            token_type="token",  # nosec B106
            expires_at=expires_at,
        )
        return self._current_token
