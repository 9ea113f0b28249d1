"""
Projection of subscriptions into Prometheus gauges.

Gauges live on the registry passed to ``SubscriptionMetrics``. Label sets
are only ever set, never removed: a subscription that disappears from the
API keeps its last values until the process restarts.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Iterable, Optional

from prometheus_client import CollectorRegistry, Gauge

from .data.models import Subscription

logger = logging.getLogger(__name__)

INFO_LABELS = (
    "contractNumber",
    "subscriptionNumber",
    "subscriptionName",
    "status",
    "sku",
)


def epoch_seconds(value: datetime) -> float:
    """Whole seconds since the epoch; naive timestamps are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return float(math.floor(value.timestamp()))


class SubscriptionMetrics:
    """
    The four subscription gauges and the registry that owns them.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()
        self.info = Gauge(
            "redhat_subscription_info",
            "Contains info about subscriptions as labels.",
            INFO_LABELS,
            registry=self.registry,
        )
        self.quantity = Gauge(
            "redhat_subscription_quantity",
            "Total number of subscriptions.",
            ["subscriptionNumber"],
            registry=self.registry,
        )
        self.start = Gauge(
            "redhat_subscription_start",
            "Unix timestamp of subscription start date.",
            ["subscriptionNumber"],
            registry=self.registry,
        )
        self.end = Gauge(
            "redhat_subscription_end",
            "Unix timestamp of subscription end date.",
            ["subscriptionNumber"],
            registry=self.registry,
        )

    def project(self, subscriptions: Iterable[Subscription]) -> int:
        """
        Set the gauges for each subscription.

        A subscription whose quantity is not a number is skipped entirely.

        Returns:
            Number of subscriptions projected
        """
        projected = 0
        for s in subscriptions:
            try:
                quantity = float(s.quantity)
            except ValueError:
                logger.debug(
                    "Skipping subscription %s: quantity %r is not a number",
                    s.subscription_number,
                    s.quantity,
                )
                continue

            self.info.labels(
                contractNumber=s.contract_number,
                subscriptionNumber=s.subscription_number,
                subscriptionName=s.subscription_name,
                status=s.status,
                sku=s.sku,
            ).set(1)
            self.quantity.labels(subscriptionNumber=s.subscription_number).set(
                quantity
            )
            self.start.labels(subscriptionNumber=s.subscription_number).set(
                epoch_seconds(s.start_date)
            )
            self.end.labels(subscriptionNumber=s.subscription_number).set(
                epoch_seconds(s.end_date)
            )
            projected += 1
        return projected
