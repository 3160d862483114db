"""
Source resolution, transports and orchestration for lock entries.

Resolution picks a transport per entry (tarball API, git clone, or
go-import discovery followed by one of those); the manager runs the
resulting fetch units under a concurrency ceiling.
"""

# Core components
from .fetcher_base import BaseFetcher, FetchResult
from .sources import ArchiveRepo, RawRemote, ResolvedSource, Unresolved, classify_source

# Individual fetchers (auto-registered via decorators)
from .fetchers import ArchiveFetcher, GitFetcher

# Resolution
from .discovery import MetaImport, MetaImportDiscoverer, parse_meta_imports
from .resolver import SourceResolver

# Management layer
from .manager import FetchManager, FetchSummary, save_summary_to_yaml
from .profiling import UnitProfiler

# Registry and factory
from .registry import (
    FetcherRegistry,
    create_fetcher,
    get_fetcher_info,
    list_fetcher_types,
    register_fetcher,
)
from .vcs import GitClient, VcsClient

__all__ = [
    # Core
    "BaseFetcher",
    "FetchResult",
    "ArchiveRepo",
    "RawRemote",
    "ResolvedSource",
    "Unresolved",
    "classify_source",
    # Resolution
    "MetaImport",
    "MetaImportDiscoverer",
    "parse_meta_imports",
    "SourceResolver",
    # Registry
    "FetcherRegistry",
    "register_fetcher",
    "create_fetcher",
    "list_fetcher_types",
    "get_fetcher_info",
    # Management
    "FetchManager",
    "FetchSummary",
    "save_summary_to_yaml",
    "UnitProfiler",
    # Fetchers
    "ArchiveFetcher",
    "GitFetcher",
    "GitClient",
    "VcsClient",
]
