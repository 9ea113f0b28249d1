"""
Tests for offline-token bearer authentication.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from rhsm_exporter.auth import OfflineTokenAuth, build_session
from rhsm_exporter.data.fetch import AuthError


def token_response(payload, status_code=200):
    response = Mock(status_code=status_code)
    response.json.return_value = payload
    return response


@pytest.fixture
def token_session():
    session = Mock(spec=requests.Session)
    session.post.return_value = token_response(
        {"access_token": "access-1", "expires_in": 900}
    )
    return session


def prepared(auth):
    request = requests.Request("GET", "https://api.example.com/subscriptions").prepare()
    return auth(request)


class TestOfflineTokenAuth:
    """Test cases for OfflineTokenAuth."""

    def test_adds_bearer_header(self, token_session):
        auth = OfflineTokenAuth("offline", "https://sso.example.com/token", session=token_session)

        request = prepared(auth)

        assert request.headers["Authorization"] == "Bearer access-1"
        token_session.post.assert_called_once_with(
            "https://sso.example.com/token",
            data={
                "grant_type": "refresh_token",
                "client_id": "rhsm-api",
                "refresh_token": "offline",
            },
            timeout=None,
        )

    def test_token_is_cached_until_expiry(self, token_session):
        auth = OfflineTokenAuth("offline", "https://sso.example.com/token", session=token_session)

        with patch("rhsm_exporter.auth.time.monotonic", return_value=1000.0):
            prepared(auth)
            prepared(auth)

        assert token_session.post.call_count == 1

    def test_token_refreshed_after_expiry(self, token_session):
        auth = OfflineTokenAuth("offline", "https://sso.example.com/token", session=token_session)
        token_session.post.side_effect = [
            token_response({"access_token": "access-1", "expires_in": 300}),
            token_response({"access_token": "access-2", "expires_in": 300}),
        ]

        with patch("rhsm_exporter.auth.time.monotonic", return_value=1000.0):
            assert prepared(auth).headers["Authorization"] == "Bearer access-1"
        with patch("rhsm_exporter.auth.time.monotonic", return_value=1295.0):
            assert prepared(auth).headers["Authorization"] == "Bearer access-2"

        assert token_session.post.call_count == 2

    def test_token_without_expiry_never_refreshes(self, token_session):
        token_session.post.return_value = token_response({"access_token": "forever"})
        auth = OfflineTokenAuth("offline", "https://sso.example.com/token", session=token_session)

        prepared(auth)
        prepared(auth)

        assert token_session.post.call_count == 1

    def test_rotated_refresh_token_is_kept(self, token_session):
        token_session.post.return_value = token_response(
            {"access_token": "access-1", "expires_in": 300, "refresh_token": "rotated"}
        )
        auth = OfflineTokenAuth("offline", "https://sso.example.com/token", session=token_session)

        prepared(auth)

        assert auth.refresh_token == "rotated"

    def test_error_response(self, token_session):
        token_session.post.return_value = token_response(
            {"error": "invalid_grant", "error_description": "Invalid refresh token"},
            status_code=400,
        )
        auth = OfflineTokenAuth("bad", "https://sso.example.com/token", session=token_session)

        with pytest.raises(AuthError, match="Invalid refresh token"):
            prepared(auth)

    def test_non_json_response(self, token_session):
        response = Mock(status_code=502)
        response.json.side_effect = ValueError("Expecting value")
        token_session.post.return_value = response
        auth = OfflineTokenAuth("offline", "https://sso.example.com/token", session=token_session)

        with pytest.raises(AuthError, match="not JSON"):
            prepared(auth)

    def test_transport_error(self, token_session):
        token_session.post.side_effect = requests.ConnectionError("unreachable")
        auth = OfflineTokenAuth("offline", "https://sso.example.com/token", session=token_session)

        with pytest.raises(AuthError, match="token request failed"):
            prepared(auth)


class TestBuildSession:
    def test_live_mode_uses_offline_token(self, test_settings):
        session = build_session(test_settings)

        assert isinstance(session.auth, OfflineTokenAuth)
        assert session.auth.refresh_token == "offline-token"
        assert session.auth.token_url == test_settings.token_url

    def test_import_mode_is_plain(self, import_settings):
        session = build_session(import_settings)

        assert session.auth is None
