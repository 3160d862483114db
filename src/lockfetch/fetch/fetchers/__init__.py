"""
Fetcher implementations, one per transport.

Importing this package registers every fetcher with the registry.
"""

from .archive_fetcher import ArchiveFetcher
from .git_fetcher import GitFetcher

__all__ = [
    "ArchiveFetcher",
    "GitFetcher",
]
