"""
Bearer authentication from an offline token.

The offline token is a long-lived OAuth2 refresh token. ``OfflineTokenAuth``
exchanges it for short-lived access tokens at the token endpoint and adds
``Authorization: Bearer ...`` to every request, exchanging again once the
current access token has expired.
"""

import logging
import time
from typing import Optional

import requests
from requests.auth import AuthBase

from .data.fetch.fetcher_base import AuthError
from .settings import Settings

logger = logging.getLogger(__name__)

# Refresh this many seconds before the reported expiry.
EXPIRY_LEEWAY = 10


class OfflineTokenAuth(AuthBase):
    """
    requests auth hook implementing the OAuth2 refresh-token grant.
    """

    def __init__(
        self,
        offline_token: str,
        token_url: str,
        client_id: str = "rhsm-api",
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.refresh_token = offline_token
        self.token_url = token_url
        self.client_id = client_id
        self.timeout = timeout
        # Token requests must not go through this auth hook.
        self._session = session if session is not None else requests.Session()
        self._access_token: Optional[str] = None
        self._expires_at: Optional[float] = None

    def __call__(self, r):
        r.headers["Authorization"] = f"Bearer {self.access_token()}"
        return r

    @property
    def expired(self) -> bool:
        if self._access_token is None:
            return True
        if self._expires_at is None:
            return False
        return time.monotonic() >= self._expires_at - EXPIRY_LEEWAY

    def access_token(self) -> str:
        """Return a valid access token, refreshing it when expired."""
        if self.expired:
            self._refresh()
        return self._access_token

    def _refresh(self) -> None:
        logger.debug("Requesting access token from %s", self.token_url)
        try:
            response = self._session.post(
                self.token_url,
                data={
                    "grant_type": "refresh_token",
                    "client_id": self.client_id,
                    "refresh_token": self.refresh_token,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AuthError(f"token request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise AuthError(f"token response is not JSON: {e}") from e

        if not isinstance(payload, dict):
            payload = {}
        if not payload.get("access_token"):
            detail = payload.get("error_description") or payload.get("error")
            raise AuthError(
                f"token endpoint returned no access token "
                f"(status {response.status_code}): {detail or 'empty response'}"
            )

        self._access_token = payload["access_token"]
        expires_in = payload.get("expires_in")
        self._expires_at = (
            time.monotonic() + float(expires_in) if expires_in else None
        )
        if payload.get("refresh_token"):
            self.refresh_token = payload["refresh_token"]
        logger.info("Obtained access token (expires in %s s)", expires_in or "n/a")


def build_session(settings: Settings) -> requests.Session:
    """
    Create the HTTP session the fetchers use.

    Live API fetching gets bearer authentication from the offline token;
    import mode uses a plain session.
    """
    session = requests.Session()
    if not settings.import_mode:
        session.auth = OfflineTokenAuth(
            settings.offline_token,
            settings.token_url,
            client_id=settings.client_id,
            timeout=settings.request_timeout,
        )
    return session
