"""
Tarball API fetcher for repositories hosted on github.

Downloads only the pinned revision instead of the full history.
"""

import logging
import time

from ..extract import extract_archive
from ..fetcher_base import BaseFetcher, FetchResult
from ..http import download
from ..registry import register_fetcher
from ..sources import ArchiveRepo, ResolvedSource

logger = logging.getLogger(__name__)


@register_fetcher("archive")
class ArchiveFetcher(BaseFetcher):
    """
    Fetcher for repositories served by the per-revision tarball API.
    """

    @property
    def fetcher_type(self) -> str:
        return "archive"

    @classmethod
    def can_handle(cls, source: ResolvedSource) -> bool:
        return isinstance(source, ArchiveRepo)

    def tarball_url(self) -> str:
        return (
            f"{self.settings.archive_api_url}/repos/"
            f"{self.source.owner}/{self.source.repo}/tarball/{self.entry.revision}"
        )

    def fetch(self) -> FetchResult:
        """
        Download the revision tarball and extract it over the target directory.
        """
        start_time = time.time()
        self.logger.info(
            "Downloading from github: %s (%s %s)",
            self.entry.name,
            self.entry.source_path,
            self.entry.revision,
        )

        payload = download(
            self.tarball_url(), timeout=self.settings.request_timeout
        )
        written = extract_archive(
            payload,
            self.target_dir,
            allow_set=self.entry.allow_set,
            verbose=self.settings.verbose,
        )

        self.logger.debug(f"Wrote {written} entries for {self.entry.name}")
        return self._result(
            files_written=written, elapsed=time.time() - start_time
        )
