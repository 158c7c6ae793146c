"""
Tests for orderly.config — registry and dispatch settings.
"""

import pytest

from orderly.config import DEFAULT_SETTINGS, OrderlySettings


# ── Defaults ─────────────────────────────────────────────────

class TestDefaults:
    def test_default_values(self):
        assert DEFAULT_SETTINGS.default_priority == 0
        assert DEFAULT_SETTINGS.subscriber_prefix == "on"
        assert DEFAULT_SETTINGS.propagate_listener_errors is True

    def test_frozen_immutability(self):
        with pytest.raises(AttributeError):
            DEFAULT_SETTINGS.default_priority = 5

    def test_empty_prefix_rejected(self):
        with pytest.raises(ValueError, match="subscriber_prefix"):
            OrderlySettings(subscriber_prefix="  ")

    def test_non_int_priority_rejected(self):
        with pytest.raises(ValueError, match="default_priority"):
            OrderlySettings(default_priority="10")

    def test_bool_priority_rejected(self):
        with pytest.raises(ValueError, match="default_priority"):
            OrderlySettings(default_priority=True)


# ── Environment ──────────────────────────────────────────────

class TestFromEnv:
    def test_empty_environment_gives_defaults(self):
        assert OrderlySettings.from_env({}) == DEFAULT_SETTINGS

    def test_all_variables(self):
        settings = OrderlySettings.from_env({
            "ORDERLY_DEFAULT_PRIORITY": " -20 ",
            "ORDERLY_SUBSCRIBER_PREFIX": "handle",
            "ORDERLY_PROPAGATE_LISTENER_ERRORS": "no",
        })
        assert settings.default_priority == -20
        assert settings.subscriber_prefix == "handle"
        assert settings.propagate_listener_errors is False

    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_truthy_flags(self, raw):
        settings = OrderlySettings.from_env(
            {"ORDERLY_PROPAGATE_LISTENER_ERRORS": raw}
        )
        assert settings.propagate_listener_errors is True

    def test_invalid_flag(self):
        with pytest.raises(ValueError, match="PROPAGATE_LISTENER_ERRORS"):
            OrderlySettings.from_env(
                {"ORDERLY_PROPAGATE_LISTENER_ERRORS": "maybe"}
            )

    def test_invalid_priority(self):
        with pytest.raises(ValueError, match="must be an integer"):
            OrderlySettings.from_env({"ORDERLY_DEFAULT_PRIORITY": "high"})

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("ORDERLY_DEFAULT_PRIORITY", "7")
        assert OrderlySettings.from_env().default_priority == 7
