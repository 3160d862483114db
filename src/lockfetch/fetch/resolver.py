"""
Per-entry source resolution.

Pure classification (:func:`~lockfetch.fetch.sources.classify_source`) runs
first; only an :class:`Unresolved` result triggers network discovery.
"""

import logging
from typing import Optional

from ..errors import UnsupportedVcsError
from ..manifest import Entry
from ..settings import Settings
from .discovery import MetaImport, MetaImportDiscoverer
from .sources import (
    ArchiveRepo,
    RawRemote,
    ResolvedSource,
    Unresolved,
    classify_source,
    match_archive_repo,
)


class SourceResolver:
    """
    Turns an entry into the concrete source its fetcher will use.

    The returned value is always an :class:`ArchiveRepo` or a git
    :class:`RawRemote`; never :class:`Unresolved`.
    """

    def __init__(
        self,
        settings: Settings,
        discoverer: Optional[MetaImportDiscoverer] = None,
    ):
        self.settings = settings
        self.discoverer = discoverer or MetaImportDiscoverer(settings)
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    def resolve(self, entry: Entry) -> ResolvedSource:
        source = classify_source(entry.source_path)
        if isinstance(source, Unresolved):
            meta = self.discoverer.discover(source.import_path)
            return self.from_meta_import(meta)
        return source

    def from_meta_import(self, meta: MetaImport) -> ResolvedSource:
        """
        Map a discovered import onto a fetchable source.

        Raises:
            UnsupportedVcsError: If the import does not use git.
        """
        if meta.vcs.lower() != "git":
            raise UnsupportedVcsError(meta.vcs)

        archive: Optional[ArchiveRepo] = match_archive_repo(meta.repo_root)
        if archive is not None:
            self.logger.debug(f"{meta.repo_root} is served by the tarball API")
            return archive
        return RawRemote(url=meta.repo_root, vcs="git")
