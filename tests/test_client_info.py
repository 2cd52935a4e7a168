"""Behavior-focused tests for client IP extraction."""

from unittest.mock import MagicMock

from visit_counter.adapters.web.client_info import extract_client_ip


class TestExtractClientIp:
    """Tests for client IP extraction behavior."""

    def test_when_x_forwarded_for_has_single_ip_then_returns_that_ip(self) -> None:
        """Given X-Forwarded-For with single IP, when extracting, then returns it."""
        request = MagicMock()
        request.headers = {"X-Forwarded-For": "203.0.113.50"}
        request.client = None

        assert extract_client_ip(request) == "203.0.113.50"

    def test_when_x_forwarded_for_has_chain_then_returns_first_ip(self) -> None:
        """Given X-Forwarded-For with IP chain, when extracting, then returns original client IP."""
        request = MagicMock()
        request.headers = {"X-Forwarded-For": "203.0.113.50, 70.41.3.18, 150.172.238.178"}
        request.client = None

        assert extract_client_ip(request) == "203.0.113.50"

    def test_when_x_forwarded_for_has_whitespace_then_trims_ip(self) -> None:
        """Given X-Forwarded-For with whitespace, when extracting, then returns trimmed IP."""
        request = MagicMock()
        request.headers = {"X-Forwarded-For": "  192.168.1.1  , 10.0.0.1"}
        request.client = None

        assert extract_client_ip(request) == "192.168.1.1"

    def test_when_no_x_forwarded_for_then_uses_direct_client_ip(self) -> None:
        """Given no X-Forwarded-For, when extracting, then uses direct connection IP."""
        request = MagicMock()
        request.headers = {}
        request.client = MagicMock()
        request.client.host = "10.0.0.1"

        assert extract_client_ip(request) == "10.0.0.1"

    def test_when_x_forwarded_for_empty_then_uses_direct_client_ip(self) -> None:
        """Given empty X-Forwarded-For, when extracting, then falls back to direct IP."""
        request = MagicMock()
        request.headers = {"X-Forwarded-For": " , 10.0.0.2"}
        request.client = MagicMock()
        request.client.host = "192.168.1.100"

        assert extract_client_ip(request) == "192.168.1.100"

    def test_when_no_client_info_available_then_returns_unknown(self) -> None:
        """Given no client information, when extracting, then returns 'unknown'."""
        request = MagicMock()
        request.headers = {}
        request.client = None

        assert extract_client_ip(request) == "unknown"

    def test_when_client_has_no_host_then_returns_unknown(self) -> None:
        """Given client without host, when extracting, then returns 'unknown'."""
        request = MagicMock()
        request.headers = {}
        request.client = MagicMock()
        request.client.host = None

        assert extract_client_ip(request) == "unknown"
