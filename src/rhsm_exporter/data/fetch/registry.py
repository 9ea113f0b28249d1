"""
Fetcher registry.

Fetchers register under a type name; the registry picks the one the
settings select. Import and live API fetching are mutually exclusive.
"""

import logging
from typing import Dict, List, Optional, Type

import requests

from ...settings import Settings
from .fetcher_base import BaseFetcher

logger = logging.getLogger(__name__)


class FetcherRegistry:
    """
    Registry for fetcher classes with decorator-based registration.
    """

    _fetchers: Dict[str, Type[BaseFetcher]] = {}
    _default_fetcher: Optional[Type[BaseFetcher]] = None

    @classmethod
    def register(
        cls,
        fetcher_type: str,
        fetcher_class: Type[BaseFetcher],
        is_default: bool = False,
    ) -> None:
        """
        Register a fetcher class for a specific type.

        Args:
            fetcher_type: Unique identifier for the fetcher
            fetcher_class: Fetcher class that inherits from BaseFetcher
            is_default: Whether this should be the default fetcher
        """
        if not issubclass(fetcher_class, BaseFetcher):
            raise ValueError(
                f"Fetcher class must inherit from BaseFetcher: {fetcher_class}"
            )

        cls._fetchers[fetcher_type] = fetcher_class

        if is_default:
            cls._default_fetcher = fetcher_class

        logger.debug(f"Registered fetcher: {fetcher_type} -> {fetcher_class.__name__}")

    @classmethod
    def get_available_types(cls) -> List[str]:
        """Get list of all registered fetcher types."""
        return list(cls._fetchers.keys())

    @classmethod
    def create_fetcher(
        cls,
        settings: Settings,
        session: Optional[requests.Session] = None,
        fetcher_type: Optional[str] = None,
    ) -> BaseFetcher:
        """
        Create the fetcher selected by the settings.

        Args:
            settings: Exporter settings
            session: HTTP session the fetcher sends requests with
            fetcher_type: Specific fetcher type to use, or None for auto-detection

        Returns:
            Configured fetcher instance
        """
        if fetcher_type:
            if fetcher_type not in cls._fetchers:
                raise ValueError(f"Unknown fetcher type: {fetcher_type}")
            return cls._fetchers[fetcher_type](settings, session)

        for ftype, fetcher_class in cls._fetchers.items():
            if fetcher_class is not cls._default_fetcher and fetcher_class.can_handle(
                settings
            ):
                logger.debug(f"Using {fetcher_class.__name__} ({ftype})")
                return fetcher_class(settings, session)

        if cls._default_fetcher is None:
            raise ValueError("No fetcher registered for the current settings")
        logger.debug(f"Using default fetcher {cls._default_fetcher.__name__}")
        return cls._default_fetcher(settings, session)


def register_fetcher(
    fetcher_type: str,
    fetcher_class: Optional[Type[BaseFetcher]] = None,
    is_default: bool = False,
):
    """
    Decorator and function for registering fetchers.

    Can be used as:
    1. Function: register_fetcher("my_type", MyFetcher)
    2. Decorator: @register_fetcher("my_type")
    3. Decorator with default: @register_fetcher("my_type", is_default=True)
    """

    def decorator(cls: Type[BaseFetcher]) -> Type[BaseFetcher]:
        FetcherRegistry.register(fetcher_type, cls, is_default)
        return cls

    if fetcher_class is not None:
        FetcherRegistry.register(fetcher_type, fetcher_class, is_default)
        return fetcher_class
    return decorator


def create_fetcher(
    settings: Settings,
    session: Optional[requests.Session] = None,
    fetcher_type: Optional[str] = None,
) -> BaseFetcher:
    """
    Create the fetcher for the given settings.

    This is the main entry point for creating fetchers.
    """
    return FetcherRegistry.create_fetcher(settings, session, fetcher_type)


def list_fetcher_types() -> List[str]:
    """List all available fetcher types."""
    return FetcherRegistry.get_available_types()
