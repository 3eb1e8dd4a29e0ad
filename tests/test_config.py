"""
Tests for settings and credential parsing.
"""

import pytest

from flownodes.config import (
    CredentialsError,
    NodeSettings,
    OAuth2Credentials,
    SentryApiCredentials,
    get_settings,
    parse_credentials,
)


@pytest.fixture
def clean_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for get_settings."""

    def test_defaults(self, clean_settings, monkeypatch):
        for name in (
            "FLOWNODES_TIMEOUT",
            "FLOWNODES_MAX_RETRIES",
            "FLOWNODES_SENTRY_BASE_URL",
            "FLOWNODES_GOOGLE_CONTACTS_BASE_URL",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = get_settings()

        assert settings.timeout == 30.0
        assert settings.max_retries == 0
        assert settings.sentry_base_url == "https://sentry.io"
        assert settings.google_contacts_base_url == "https://people.googleapis.com/v1"

    def test_reads_environment(self, clean_settings, monkeypatch):
        monkeypatch.setenv("FLOWNODES_TIMEOUT", "5")
        monkeypatch.setenv("FLOWNODES_MAX_RETRIES", "2")
        monkeypatch.setenv("FLOWNODES_LOG_REQUESTS", "TRUE")
        monkeypatch.setenv("FLOWNODES_SENTRY_BASE_URL", "https://sentry.internal")

        settings = get_settings()

        assert settings.timeout == 5.0
        assert settings.max_retries == 2
        assert settings.log_requests is True
        assert settings.sentry_base_url == "https://sentry.internal"

    def test_cached(self, clean_settings):
        assert get_settings() is get_settings()

    def test_rejects_negative_retries(self):
        with pytest.raises(ValueError):
            NodeSettings(max_retries=-1)


class TestCredentials:
    """Tests for parse_credentials."""

    def test_sentry_token(self):
        credentials = parse_credentials(
            SentryApiCredentials,
            {"token": "sntrys_abc", "url": "https://sentry.example.com", "extra": 1},
            credential="sentryioApi",
        )

        assert credentials.token.get_secret_value() == "sntrys_abc"
        assert credentials.url == "https://sentry.example.com"
        assert "sntrys_abc" not in repr(credentials)

    def test_oauth2_defaults_to_bearer(self):
        credentials = parse_credentials(
            OAuth2Credentials, {"access_token": "ya29"}, credential="googleContactsOAuth2Api"
        )

        assert credentials.token_type == "Bearer"

    def test_missing(self):
        with pytest.raises(CredentialsError) as exc_info:
            parse_credentials(SentryApiCredentials, None, credential="sentryioApi")

        assert str(exc_info.value) == "[sentryioApi] No credentials returned"

    def test_invalid(self):
        with pytest.raises(CredentialsError, match=r"fields: token"):
            parse_credentials(SentryApiCredentials, {"url": "x"}, credential="sentryioApi")
