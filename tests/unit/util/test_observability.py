"""Unit tests for observability settings."""

import pytest

from agriforum.config import ObservabilitySettings, Settings
from agriforum.util.observability import should_send_to_logfire


class TestShouldSendToLogfire:
    """Tests for should_send_to_logfire."""

    @pytest.mark.parametrize(
        "token,explicit,expected",
        [
            (None, None, False),
            ("tok", None, True),
            ("tok", False, False),
            (None, True, True),
        ],
    )
    def test_decision(self, token, explicit, expected):
        """Explicit setting wins, otherwise a token enables sending."""
        settings = Settings(
            observability=ObservabilitySettings(
                logfire_token=token, send_to_logfire=explicit
            )
        )

        assert should_send_to_logfire(settings) is expected
