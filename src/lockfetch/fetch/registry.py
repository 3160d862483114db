"""
Fetcher registry mapping resolved sources to fetcher classes.
"""

import logging
from typing import Dict, List, Optional, Type

from ..manifest import Entry
from ..settings import Settings
from .fetcher_base import BaseFetcher
from .sources import ResolvedSource
from .vcs import VcsClient

logger = logging.getLogger(__name__)


class FetcherRegistry:
    """
    Registry for fetcher classes with automatic registration support.
    """

    _fetchers: Dict[str, Type[BaseFetcher]] = {}

    @classmethod
    def register(cls, fetcher_type: str, fetcher_class: Type[BaseFetcher]) -> None:
        """
        Register a fetcher class for a specific type.

        Args:
            fetcher_type: Unique identifier for the fetcher
            fetcher_class: Fetcher class that inherits from BaseFetcher
        """
        if not issubclass(fetcher_class, BaseFetcher):
            raise ValueError(
                f"Fetcher class must inherit from BaseFetcher: {fetcher_class}"
            )

        cls._fetchers[fetcher_type] = fetcher_class
        logger.debug(f"Registered fetcher: {fetcher_type} -> {fetcher_class.__name__}")

    @classmethod
    def unregister(cls, fetcher_type: str) -> None:
        cls._fetchers.pop(fetcher_type, None)

    @classmethod
    def get_available_types(cls) -> List[str]:
        """Get list of all registered fetcher types."""
        return list(cls._fetchers.keys())

    @classmethod
    def get_fetcher_class(cls, source: ResolvedSource) -> Type[BaseFetcher]:
        """
        Return the first registered fetcher class that handles ``source``.
        """
        for fetcher_class in cls._fetchers.values():
            if fetcher_class.can_handle(source):
                return fetcher_class
        raise ValueError(f"No compatible fetcher found for source: {source!r}")

    @classmethod
    def create_fetcher(
        cls,
        entry: Entry,
        source: ResolvedSource,
        settings: Settings,
        vcs_client: Optional[VcsClient] = None,
    ) -> BaseFetcher:
        """
        Create the fetcher for an entry's resolved source.
        """
        fetcher_class = cls.get_fetcher_class(source)
        logger.debug(f"Using {fetcher_class.__name__} for {entry.name}")
        return fetcher_class(entry, source, settings, vcs_client=vcs_client)

    @classmethod
    def get_info(cls) -> Dict[str, str]:
        """
        Get information about all registered fetchers.
        """
        return {
            fetcher_type: (
                f"{fetcher_class.__name__} - "
                f"{(fetcher_class.__doc__ or 'No description').strip()}"
            )
            for fetcher_type, fetcher_class in cls._fetchers.items()
        }


def register_fetcher(fetcher_type: str):
    """
    Class decorator registering a fetcher under ``fetcher_type``.
    """

    def decorator(cls: Type[BaseFetcher]) -> Type[BaseFetcher]:
        FetcherRegistry.register(fetcher_type, cls)
        return cls

    return decorator


def create_fetcher(
    entry: Entry,
    source: ResolvedSource,
    settings: Settings,
    vcs_client: Optional[VcsClient] = None,
) -> BaseFetcher:
    """
    Create the fetcher for a resolved source.

    This is the main entry point for creating fetchers.
    """
    return FetcherRegistry.create_fetcher(entry, source, settings, vcs_client)


def list_fetcher_types() -> List[str]:
    return FetcherRegistry.get_available_types()


def get_fetcher_info() -> Dict[str, str]:
    return FetcherRegistry.get_info()
