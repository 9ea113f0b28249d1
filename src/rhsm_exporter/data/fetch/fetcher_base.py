"""
Abstract base class for subscription fetchers and the fetch error types.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from ...settings import Settings
from ..models import Subscription

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """
    A fetch cycle failed; no records are returned.
    """


class ApiError(FetchError):
    """
    The subscription API answered with an error envelope.
    """

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"API error {code}: {message}")


class TransportError(FetchError):
    """
    The request could not be sent or its body could not be read.
    """


class DecodeError(FetchError):
    """
    The response body is not the expected JSON document.
    """


class AuthError(FetchError):
    """
    The offline token could not be exchanged for an access token.
    """


class BaseFetcher(ABC):
    """
    Abstract base class for fetchers returning one cycle's subscriptions.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session if session is not None else requests.Session()
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    @classmethod
    @abstractmethod
    def can_handle(cls, settings: Settings) -> bool:
        """
        Check if this fetcher is the data source selected by the settings.
        """
        pass

    @abstractmethod
    def fetch(self) -> List[Subscription]:
        """
        Fetch every subscription and return them in request order.
        """
        pass

    @property
    @abstractmethod
    def fetcher_type(self) -> str:
        """
        Return the type identifier for this fetcher.
        """
        pass

    def _get(self, url: str, **kwargs) -> bytes:
        """
        Issue a GET request and return the raw body.

        HTTP status codes are not inspected; callers decide from the body.
        """
        try:
            response = self.session.get(
                url, timeout=self.settings.request_timeout, **kwargs
            )
            return response.content
        except requests.RequestException as e:
            raise TransportError(f"request failed: {e}") from e

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(type={self.fetcher_type})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(session={self.session!r})"
