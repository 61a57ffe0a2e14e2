"""Unit tests for notifier option models.

Covers camelCase option parsing, defaults, environment variable substitution
and resolution into the immutable NotifierSettings.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from regnotify.config.exceptions import ConfigurationValidationError
from regnotify.config.models import (
    NotificationPolicy,
    NotificationTarget,
    NotifierOptions,
    NotifierSettings,
    PrCommentBehavior,
)


class TestNotifierOptions:
    """Tests for NotifierOptions validation and defaults."""

    def test_defaults(self):
        """
        Why: reg-suit users usually only configure the repository
        What: Tests that comments and statuses are on by default and the
              behavior tag defaults to "default"
        How: Builds options with owner and repository only
        """
        options = NotifierOptions(owner="octo", repository="widgets")

        assert options.pr_comment is True
        assert options.set_commit_status is True
        assert options.pr_comment_behavior is PrCommentBehavior.DEFAULT
        assert options.short_description is False
        assert options.regconfig_id == ""
        assert options.custom_endpoint is None

    def test_parses_camel_case_keys(self):
        options = NotifierOptions.model_validate(
            {
                "owner": "octo",
                "repository": "widgets",
                "prComment": False,
                "prCommentBehavior": "once",
                "setCommitStatus": False,
                "shortDescription": True,
                "regconfigId": "cfg-1",
                "customEndpoint": "https://ghe.example.com/api/v3",
            }
        )

        assert options.pr_comment is False
        assert options.pr_comment_behavior is PrCommentBehavior.ONCE
        assert options.set_commit_status is False
        assert options.short_description is True
        assert options.regconfig_id == "cfg-1"
        assert options.custom_endpoint == "https://ghe.example.com/api/v3"

    def test_requires_client_id_or_repository(self):
        with pytest.raises(ValidationError, match="clientId"):
            NotifierOptions(owner="octo")

    def test_rejects_unknown_behavior(self):
        with pytest.raises(ValidationError):
            NotifierOptions.model_validate(
                {"owner": "o", "repository": "r", "prCommentBehavior": "sometimes"}
            )

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            NotifierOptions.model_validate({"owner": "o", "repository": "r", "foo": 1})

    def test_rejects_non_http_endpoint(self):
        with pytest.raises(ValidationError):
            NotifierOptions(owner="o", repository="r", custom_endpoint="ftp://x")

    def test_app_credentials_come_in_pairs(self):
        with pytest.raises(ValidationError):
            NotifierOptions(owner="o", repository="r", app_id="1")

    def test_substitutes_environment_variables(self):
        """
        Why: Tokens must not be committed to regconfig.json
        What: Tests ${VAR} and ${VAR:default} substitution in string options
        How: Patches the environment and validates options referencing it
        """
        with patch.dict("os.environ", {"GITHUB_TOKEN": "ghp_from_env"}, clear=False):
            options = NotifierOptions.model_validate(
                {
                    "owner": "${REG_OWNER:octo}",
                    "repository": "widgets",
                    "token": "${GITHUB_TOKEN}",
                }
            )

        assert options.token == "ghp_from_env"
        assert options.owner == "octo"

    def test_missing_environment_variable_fails(self):
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ValidationError, match="REG_MISSING"):
                NotifierOptions.model_validate(
                    {"owner": "o", "repository": "r", "token": "${REG_MISSING}"}
                )

    def test_blank_token_is_absent(self):
        options = NotifierOptions(owner="o", repository="r", token="  ")

        assert options.token is None


class TestNotifierSettings:
    """Tests for resolving options into NotifierSettings."""

    def test_from_explicit_repository(self):
        options = NotifierOptions(
            owner="octo",
            repository="widgets",
            installation_id="99",
            regconfig_id="cfg",
            pr_comment_behavior=PrCommentBehavior.NEW,
            token="ghp_x",
        )

        settings = NotifierSettings.from_options(options)

        assert settings.target == NotificationTarget("octo", "widgets", "99")
        assert settings.policy == NotificationPolicy(
            post_comment=True,
            comment_behavior=PrCommentBehavior.NEW,
            set_commit_status=True,
            short_description=False,
            config_id="cfg",
        )
        assert settings.api_base_url == "https://api.github.com"
        assert settings.token == "ghp_x"

    def test_client_id_wins_over_explicit_repository(self, client_id_factory):
        """
        Why: The decoded client id is the authoritative target when given
        What: Tests that owner, repository and installation come from the id
        How: Supplies both a client id and a conflicting owner/repository
        """
        options = NotifierOptions(
            client_id=client_id_factory("acme", "site", "555"),
            owner="octo",
            repository="widgets",
        )

        settings = NotifierSettings.from_options(options)

        assert settings.target == NotificationTarget("acme", "site", "555")

    def test_invalid_client_id(self):
        options = NotifierOptions(client_id="bm90IGEgY2xpZW50IGlk")

        with pytest.raises(ConfigurationValidationError):
            NotifierSettings.from_options(options)

    def test_custom_endpoint(self):
        options = NotifierOptions(
            owner="o", repository="r", custom_endpoint="https://ghe.example.com/api/v3"
        )

        assert (
            NotifierSettings.from_options(options).api_base_url
            == "https://ghe.example.com/api/v3"
        )

    def test_github_app_requires_installation(self):
        options = NotifierOptions(
            owner="o", repository="r", app_id="1", private_key="pem"
        )

        with pytest.raises(ConfigurationValidationError, match="installation"):
            NotifierSettings.from_options(options)

    def test_settings_are_immutable(self):
        settings = NotifierSettings.from_options(
            NotifierOptions(owner="o", repository="r")
        )

        with pytest.raises(AttributeError):
            settings.policy.post_comment = False  # type: ignore[misc]
