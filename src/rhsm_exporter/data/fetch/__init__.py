"""
Subscription fetching: live paginated API or single-document import.
"""

# Core components
from .fetcher_base import (
    ApiError,
    AuthError,
    BaseFetcher,
    DecodeError,
    FetchError,
    TransportError,
)

# Individual fetchers (auto-registered via decorators)
from .fetchers import ApiFetcher, ImportFetcher

# Registry and factory
from .registry import (
    FetcherRegistry,
    create_fetcher,
    list_fetcher_types,
    register_fetcher,
)

__all__ = [
    # Core
    "BaseFetcher",
    "FetchError",
    "ApiError",
    "TransportError",
    "DecodeError",
    "AuthError",
    # Registry
    "FetcherRegistry",
    "register_fetcher",
    "create_fetcher",
    "list_fetcher_types",
    # Fetchers
    "ApiFetcher",
    "ImportFetcher",
]
