"""Pydantic configuration models for the GitHub notifier.

``NotifierOptions`` mirrors the options block reg-suit passes to the
``reg-notify-github-plugin`` (camelCase keys). It is validated once and turned
into the frozen ``NotifierSettings`` the notifier holds for its lifetime.

Environment variables are substituted using the format ${VAR_NAME} with
optional defaults: ${VAR_NAME:default_value}
"""

import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..github.auth import DEFAULT_API_BASE_URL
from .client_id import decode_client_id
from .exceptions import ConfigurationValidationError


class PrCommentBehavior(str, Enum):
    """How the receiving side should treat repeated pull request comments."""

    DEFAULT = "default"
    ONCE = "once"
    NEW = "new"


class BaseConfigModel(BaseModel):
    """Base configuration model with environment variable substitution."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def substitute_env_vars(cls, values: Any) -> Any:
        """Substitute environment variables in string values.

        Supports formats:
        - ${VAR_NAME} - Required environment variable
        - ${VAR_NAME:default} - Optional with default value

        Raises:
            ValueError: If required environment variable is missing
        """
        if not isinstance(values, dict):
            return values

        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)

            env_value = os.getenv(var_name)
            if env_value is not None:
                return env_value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Required environment variable '{var_name}' not found")

        return {
            key: re.sub(pattern, replacer, value) if isinstance(value, str) else value
            for key, value in values.items()
        }


class NotifierOptions(BaseConfigModel):
    """Options block of the GitHub notifier plugin."""

    client_id: str | None = Field(
        default=None,
        description="Opaque client id encoding owner, repository and installation",
    )
    installation_id: str | None = Field(
        default=None, description="GitHub App installation id"
    )
    owner: str | None = Field(default=None, description="Repository owner")
    repository: str | None = Field(default=None, description="Repository name")
    regconfig_id: str = Field(
        default="", description="Identifier of the reg-suit configuration"
    )
    pr_comment: bool = Field(
        default=True, description="Post a comment on the branch's pull request"
    )
    pr_comment_behavior: PrCommentBehavior = Field(
        default=PrCommentBehavior.DEFAULT,
        description="Comment behavior tag passed along with the comment",
    )
    set_commit_status: bool = Field(
        default=True, description="Set a commit status on the HEAD commit"
    )
    custom_endpoint: str | None = Field(
        default=None, description="GitHub API base URL override (GitHub Enterprise)"
    )
    short_description: bool = Field(
        default=False, description="Ask for short descriptions in the comment"
    )
    token: str | None = Field(
        default=None, description="Personal access token, e.g. ${GITHUB_TOKEN}"
    )
    app_id: str | None = Field(default=None, description="GitHub App id")
    private_key: str | None = Field(
        default=None, description="GitHub App private key (PEM)"
    )

    @field_validator(
        "client_id", "token", "custom_endpoint", "owner", "repository", mode="before"
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty strings as absent values."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("custom_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str | None) -> str | None:
        """Validate the API endpoint override."""
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("customEndpoint must be an http(s) URL")
        return v

    @model_validator(mode="after")
    def validate_target(self) -> "NotifierOptions":
        """Require a client id or an explicit owner/repository pair."""
        if not self.client_id and not (self.owner and self.repository):
            raise ValueError("Either clientId or both owner and repository are required")
        if bool(self.app_id) != bool(self.private_key):
            raise ValueError("appId and privateKey must be given together")
        return self


@dataclass(frozen=True)
class NotificationTarget:
    """Remote repository that receives the notification."""

    owner: str
    repository: str
    installation_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repository}"


@dataclass(frozen=True)
class NotificationPolicy:
    """What the notifier is allowed to do, fixed at construction time."""

    post_comment: bool = True
    comment_behavior: PrCommentBehavior = PrCommentBehavior.DEFAULT
    set_commit_status: bool = True
    short_description: bool = False
    config_id: str = ""


@dataclass(frozen=True)
class NotifierSettings:
    """Resolved, immutable notifier configuration."""

    target: NotificationTarget
    policy: NotificationPolicy
    api_base_url: str = DEFAULT_API_BASE_URL
    token: str | None = None
    app_id: str | None = None
    private_key: str | None = None

    @classmethod
    def from_options(cls, options: NotifierOptions) -> "NotifierSettings":
        """Resolve options into settings, decoding the client id if present.

        Raises:
            ConfigurationValidationError: If the client id cannot be decoded
                or a GitHub App is configured without an installation id
        """
        if options.client_id:
            decoded = decode_client_id(options.client_id)
            target = NotificationTarget(
                owner=decoded.owner,
                repository=decoded.repository,
                installation_id=decoded.installation_id,
            )
        else:
            # validate_target guarantees both are present here
            target = NotificationTarget(
                owner=options.owner or "",
                repository=options.repository or "",
                installation_id=options.installation_id,
            )

        if options.app_id and not target.installation_id:
            raise ConfigurationValidationError(
                "GitHub App authentication requires an installation id"
            )

        policy = NotificationPolicy(
            post_comment=options.pr_comment,
            comment_behavior=options.pr_comment_behavior,
            set_commit_status=options.set_commit_status,
            short_description=options.short_description,
            config_id=options.regconfig_id,
        )

        return cls(
            target=target,
            policy=policy,
            api_base_url=options.custom_endpoint or DEFAULT_API_BASE_URL,
            token=options.token,
            app_id=options.app_id,
            private_key=options.private_key,
        )
