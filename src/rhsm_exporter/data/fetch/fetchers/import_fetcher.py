"""
Fetcher importing subscriptions from a single JSON document.
"""

import logging
from typing import List

from pydantic import ValidationError

from ....settings import Settings
from ...models import Subscription
from ...utils import load_subscriptions
from ..fetcher_base import BaseFetcher, DecodeError
from ..registry import register_fetcher

logger = logging.getLogger(__name__)


@register_fetcher("import")
class ImportFetcher(BaseFetcher):
    """
    Fetcher reading a bare JSON array of subscriptions from a URL,
    such as a file written by export mode and served over HTTP.
    """

    @property
    def fetcher_type(self) -> str:
        return "import"

    @classmethod
    def can_handle(cls, settings: Settings) -> bool:
        return settings.import_mode

    def fetch(self) -> List[Subscription]:
        """
        Fetch the document at ``import_url``.

        Basic auth is attached only when both username and password are set.
        """
        auth = None
        if self.settings.import_username and self.settings.import_password:
            auth = (self.settings.import_username, self.settings.import_password)

        self.logger.debug("Importing subscriptions from %s", self.settings.import_url)
        body = self._get(self.settings.import_url, auth=auth)

        try:
            subscriptions = load_subscriptions(body)
        except ValidationError as e:
            raise DecodeError(f"decode failed: {e}") from e

        self.logger.info(
            f"Imported {len(subscriptions)} subscriptions from {self.settings.import_url}"
        )
        return subscriptions
