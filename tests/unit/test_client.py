"""Unit tests for client.py module.

Tests building authenticated sessions from profiles and the server
health check.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from promcli.client import build_session, check_server_health
from promcli.exceptions import ServerConnectionError
from promcli.models import Profile


class TestBuildSession:
    """Test cases for session construction."""

    def test_no_auth(self):
        """Test a profile without credentials."""
        session = build_session(Profile(server_url="http://localhost:9090"))

        assert session.auth is None
        assert "Authorization" not in session.headers

    def test_basic_auth(self):
        """Test that basic credentials are set on the session."""
        session = build_session(
            Profile(server_url="https://prod.example.com", username="admin", password="secret")
        )

        assert session.auth == ("admin", "secret")
        assert "Authorization" not in session.headers

    def test_bearer_token(self):
        """Test that tokens become an Authorization header."""
        session = build_session(Profile(server_url="https://prod.example.com", token="abc123"))

        assert session.headers["Authorization"] == "Bearer abc123"
        assert session.auth is None

    def test_user_agent(self):
        """Test the client identifies itself."""
        session = build_session(Profile(server_url="https://prod.example.com"))

        assert session.headers["User-Agent"] == "prom-cli"


class TestCheckServerHealth:
    """Test cases for the health check."""

    @pytest.fixture
    def profile(self):
        return Profile(server_url="https://prod.example.com", token="abc123")

    def make_session(self, status_code=200, side_effect=None):
        session = Mock()
        if side_effect:
            session.get.side_effect = side_effect
        else:
            session.get.return_value = Mock(status_code=status_code)
        return session

    def test_healthy_server(self, profile):
        """Test a server answering 200."""
        session = self.make_session(200)

        check_server_health(profile, timeout=5, session=session)

        session.get.assert_called_once_with("https://prod.example.com/-/healthy", timeout=5)

    def test_unauthorized(self, profile):
        """Test that a 401 is reported as an authentication problem."""
        session = self.make_session(401)

        with pytest.raises(ServerConnectionError, match="Authentication failed") as exc_info:
            check_server_health(profile, session=session)

        assert exc_info.value.status_code == 401

    def test_unhealthy_status(self, profile):
        """Test non-200 responses."""
        session = self.make_session(503)

        with pytest.raises(ServerConnectionError, match="HTTP 503"):
            check_server_health(profile, session=session)

    def test_connection_failure(self, profile):
        """Test network errors."""
        session = self.make_session(side_effect=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(ServerConnectionError, match="Failed to connect") as exc_info:
            check_server_health(profile, session=session)

        assert exc_info.value.server_url == "https://prod.example.com"

    @patch("promcli.client.requests.Session.get")
    def test_builds_session_when_none_given(self, mock_get, profile):
        """Test the default session path."""
        mock_get.return_value = Mock(status_code=200)

        check_server_health(profile, timeout=3)

        mock_get.assert_called_once_with("https://prod.example.com/-/healthy", timeout=3)
