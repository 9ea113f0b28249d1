"""
Export and polling cycles.

Export mode fetches once and writes the records to a file. Serve mode
fetches and projects into gauges forever, sleeping between cycles; the
first failed fetch ends the loop.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from .data.fetch.fetcher_base import BaseFetcher
from .data.utils import write_subscriptions
from .metrics import SubscriptionMetrics

logger = logging.getLogger(__name__)


class Exporter:
    """
    Runs fetch cycles against one fetcher.
    """

    def __init__(
        self,
        fetcher: BaseFetcher,
        metrics: Optional[SubscriptionMetrics] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.fetcher = fetcher
        self.metrics = metrics
        self._sleep = sleep

    def export(self, path: Path) -> int:
        """
        Fetch once and write every record to ``path`` as indented JSON.

        Returns:
            Number of records written
        """
        logger.info(f"Exporting subscriptions to {path}")
        subscriptions = self.fetcher.fetch()
        write_subscriptions(subscriptions, path)
        return len(subscriptions)

    def run_cycle(self) -> int:
        """Fetch once and project the records into the gauges."""
        if self.metrics is None:
            raise RuntimeError("Exporter has no metrics to project into")
        subscriptions = self.fetcher.fetch()
        projected = self.metrics.project(subscriptions)
        logger.info(
            "Projected %d of %d subscriptions", projected, len(subscriptions)
        )
        return projected

    def poll_forever(self, interval: float) -> None:
        """
        Run cycles every ``interval`` seconds. Only returns by raising.
        """
        logger.info(f"Polling {self.fetcher} every {interval}s")
        while True:
            self.run_cycle()
            self._sleep(interval)
