"""
Fetcher implementations.

Each module registers its fetcher with the registry on import.
"""

from .api_fetcher import ApiFetcher
from .import_fetcher import ImportFetcher

__all__ = [
    "ApiFetcher",
    "ImportFetcher",
]
