"""
Unit tests for settings loading.

Tests cover:
- Defaults
- Environment variable overrides
- Secret handling
"""

from sdk.codefirst_sdk.config import CodeFirstSettings


class TestCodeFirstSettings:
    """Tests for CodeFirstSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("SPACE_ID", "FORCE_UPDATE", "PUBLISH_AUTOMATICALLY", "ENVIRONMENT"):
            monkeypatch.delenv(f"CODEFIRST_{name}", raising=False)

        settings = CodeFirstSettings()

        assert settings.environment == "master"
        assert settings.force_update is False
        assert settings.publish_automatically is False
        assert settings.timeout == 30.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CODEFIRST_SPACE_ID", "space42")
        monkeypatch.setenv("CODEFIRST_ENVIRONMENT", "staging")
        monkeypatch.setenv("CODEFIRST_FORCE_UPDATE", "true")
        monkeypatch.setenv("CODEFIRST_PUBLISH_AUTOMATICALLY", "1")

        settings = CodeFirstSettings()

        assert settings.space_id == "space42"
        assert settings.environment == "staging"
        assert settings.force_update is True
        assert settings.publish_automatically is True

    def test_api_key_is_secret(self, monkeypatch):
        """The token is never shown in reprs."""
        monkeypatch.setenv("CODEFIRST_API_KEY", "CFPAT-secret")

        settings = CodeFirstSettings()

        assert settings.api_key.get_secret_value() == "CFPAT-secret"
        assert "CFPAT-secret" not in repr(settings)

    def test_constructor_arguments(self):
        settings = CodeFirstSettings(space_id="abc", force_update=True)

        assert settings.space_id == "abc"
        assert settings.force_update is True
