"""
Clone fetcher for remotes without a tarball API.
"""

import logging
import time

from ...errors import ExtractionError, UnsupportedVcsError
from ..extract import remove_tree
from ..fetcher_base import BaseFetcher, FetchResult
from ..registry import register_fetcher
from ..sources import RawRemote, ResolvedSource

logger = logging.getLogger(__name__)


@register_fetcher("git")
class GitFetcher(BaseFetcher):
    """
    Fetcher that clones the remote and hard-resets it to the pinned revision.
    """

    @property
    def fetcher_type(self) -> str:
        return "git"

    @classmethod
    def can_handle(cls, source: ResolvedSource) -> bool:
        return isinstance(source, RawRemote)

    def fetch(self) -> FetchResult:
        """
        Clone into a fresh target directory and pin it to the revision.

        A failed clone or reset leaves whatever git wrote in place.
        """
        start_time = time.time()
        if self.source.vcs.lower() != self.vcs_client.vcs:
            raise UnsupportedVcsError(self.source.vcs)

        self.logger.info(
            "Downloading with git: %s (%s %s)",
            self.entry.name,
            self.source.url,
            self.entry.revision,
        )

        target = self.target_dir
        remove_tree(target)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExtractionError(f"Failed to create {target.parent}: {e}") from e

        output = self.vcs_client.clone(self.source.url, target)
        output += self.vcs_client.reset_hard(target, self.entry.revision)

        return self._result(output=output or None, elapsed=time.time() - start_time)
