"""
Paginated fetcher for the live subscription API.

Pages are requested with a fixed limit and a growing offset until a page
comes back shorter than the limit. The page length decides; the
pagination metadata in the envelope is not consulted.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from ....settings import Settings
from ...models import ErrorDetail, ErrorEnvelope, Subscription, SubscriptionsPage
from ..fetcher_base import ApiError, BaseFetcher, DecodeError, FetchError
from ..registry import register_fetcher

logger = logging.getLogger(__name__)


@register_fetcher("api", is_default=True)
class ApiFetcher(BaseFetcher):
    """
    Fetcher walking the page-offset subscription listing endpoint.
    """

    @property
    def fetcher_type(self) -> str:
        return "api"

    @classmethod
    def can_handle(cls, settings: Settings) -> bool:
        """Live fetching applies whenever no import URL is configured."""
        return not settings.import_mode

    def fetch(self) -> List[Subscription]:
        """
        Fetch all pages and concatenate their records in request order.

        Returns:
            Every subscription across all pages

        Raises:
            ApiError: a page carried an error envelope
            TransportError: a request failed
            DecodeError: a page was not a valid page envelope
            FetchError: ``max_pages`` full pages were read without an end
        """
        limit = self.settings.page_size
        max_pages = self.settings.max_pages
        offset = 0
        pages = 0
        subscriptions: List[Subscription] = []

        while True:
            self.logger.debug(
                "Requesting %s limit=%d offset=%d", self.settings.api_url, limit, offset
            )
            body = self._get(
                self.settings.api_url, params={"limit": limit, "offset": offset}
            )

            error = self._parse_error(body)
            if error is not None:
                raise ApiError(error.code, error.message)

            try:
                page = SubscriptionsPage.model_validate_json(body)
            except ValidationError as e:
                raise DecodeError(f"decode failed: {e}") from e

            subscriptions.extend(page.body)

            if len(page.body) < limit:
                break

            pages += 1
            if max_pages is not None and pages >= max_pages:
                raise FetchError(
                    f"stopped after {pages} full pages of {limit} records"
                )
            offset += limit

        self.logger.info(
            f"Fetched {len(subscriptions)} subscriptions from {self.settings.api_url}"
        )
        return subscriptions

    @staticmethod
    def _parse_error(body: bytes) -> Optional[ErrorDetail]:
        """Return the error carried by ``body``, if it is an error envelope."""
        try:
            envelope = ErrorEnvelope.model_validate_json(body)
        except ValidationError:
            return None
        if envelope.error.message:
            return envelope.error
        return None
