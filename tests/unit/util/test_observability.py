"""Unit tests for Logfire configuration."""

import logfire
import pytest

from identity_store.config import ObservabilitySettings, Settings
from identity_store.util.observability import configure_logfire


@pytest.fixture
def configure_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(logfire, "configure", lambda **kwargs: calls.append(kwargs))
    return calls


class TestConfigureLogfire:
    """Tests for configure_logfire()."""

    def test_console_only_without_token(self, configure_calls):
        configure_logfire(Settings(_env_file=None))

        assert configure_calls[0]["send_to_logfire"] is False
        assert "token" not in configure_calls[0]

    def test_token_enables_sending(self, configure_calls):
        settings = Settings(
            _env_file=None,
            observability=ObservabilitySettings(logfire_token="secret"),
        )

        configure_logfire(settings)

        assert configure_calls[0]["send_to_logfire"] is True
        assert configure_calls[0]["token"] == "secret"

    def test_explicit_setting_wins(self, configure_calls):
        settings = Settings(
            _env_file=None,
            observability=ObservabilitySettings(
                logfire_token="secret", send_to_logfire=False
            ),
        )

        configure_logfire(settings)

        assert configure_calls[0]["send_to_logfire"] is False
