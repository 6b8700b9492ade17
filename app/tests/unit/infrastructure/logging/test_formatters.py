"""Unit tests for infrastructure.logging.formatters module.

Tests cover:
- add_app_info processor
- truncate_large_values processor
"""

import pytest
from infrastructure.logging.formatters import add_app_info, truncate_large_values


@pytest.mark.unit
class TestAddAppInfo:
    """Test suite for add_app_info processor factory."""

    def test_add_app_info_adds_name_and_version(self):
        """Processor adds app_name and app_version to event dict."""
        processor = add_app_info("observer-showcase", "1.2.3")
        event_dict = {"event": "test_event", "key": "value"}

        result = processor(None, "info", event_dict)

        assert result["app_name"] == "observer-showcase"
        assert result["app_version"] == "1.2.3"
        assert result["key"] == "value"

    def test_add_app_info_with_unknown_version(self):
        """Default version is 'unknown' if not provided."""
        processor = add_app_info("test-app")

        result = processor(None, "info", {"event": "test"})

        assert result["app_version"] == "unknown"


@pytest.mark.unit
class TestTruncateLargeValues:
    """Test suite for truncate_large_values processor factory."""

    def test_truncates_long_string(self):
        processor = truncate_large_values(max_length=10)

        result = processor(None, "info", {"payload": "x" * 25})

        assert result["payload"].startswith("x" * 10)
        assert "[truncated, 25 chars total]" in result["payload"]

    def test_preserves_short_strings_and_non_strings(self):
        processor = truncate_large_values(max_length=10)
        event_dict = {"short": "abc", "number": 12345678901234, "items": [1] * 50}

        result = processor(None, "info", dict(event_dict))

        assert result == event_dict

    def test_default_length_is_500(self):
        processor = truncate_large_values()

        result = processor(None, "info", {"ok": "y" * 500, "long": "y" * 501})

        assert result["ok"] == "y" * 500
        assert "truncated" in result["long"]
