"""
Subscription data: models, serialization and fetchers.
"""

from .fetch import FetchError, create_fetcher
from .models import Pool, Subscription
from .utils import dump_subscriptions, load_subscriptions, write_subscriptions

__all__ = [
    "FetchError",
    "Pool",
    "Subscription",
    "create_fetcher",
    "dump_subscriptions",
    "load_subscriptions",
    "write_subscriptions",
]
