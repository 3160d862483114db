"""
Fetch manager orchestrating concurrent per-entry fetch units.

Each unit resolves its entry's source and runs the matching fetcher. Units
run on a fixed-size thread pool and never raise: failures come back as
unsuccessful :class:`FetchResult` values and are aggregated once every unit
has finished.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import nullcontext
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import yaml

from ..errors import VcsCommandError
from ..manifest import Entry
from ..settings import Settings
from .fetcher_base import FetchResult
from .profiling import UnitProfiler
from .registry import create_fetcher
from .resolver import SourceResolver
from .vcs import VcsClient

logger = logging.getLogger(__name__)


class FetchSummary:
    """
    Aggregate outcome of a fetch run, in manifest order.
    """

    def __init__(self, results: Sequence[FetchResult], elapsed: float = 0.0):
        self.results = list(results)
        self.elapsed = elapsed

    @property
    def succeeded(self) -> List[FetchResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[FetchResult]:
        return [r for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": len(self.results),
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "elapsed": round(self.elapsed, 3),
            "results": [r.to_dict() for r in self.results],
        }


class FetchManager:
    """
    Runs one resolve-then-fetch unit per entry under a concurrency ceiling.
    """

    def __init__(
        self,
        settings: Settings,
        resolver: Optional[SourceResolver] = None,
        vcs_client: Optional[VcsClient] = None,
        profiler: Optional[UnitProfiler] = None,
    ):
        self.settings = settings
        self.resolver = resolver or SourceResolver(settings)
        self.vcs_client = vcs_client
        self.profiler = profiler
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    def fetch_entry(self, entry: Entry) -> FetchResult:
        """
        Resolve and fetch a single entry.

        Every exception raised while resolving or fetching is captured in
        the returned result.
        """
        start_time = time.time()
        unit = self.profiler.unit() if self.profiler else nullcontext()
        try:
            with unit:
                source = self.resolver.resolve(entry)
                fetcher = create_fetcher(
                    entry, source, self.settings, vcs_client=self.vcs_client
                )
                result = fetcher.fetch()
        except Exception as e:
            self.logger.error(f"Failed to fetch {entry.name}: {e}")
            return FetchResult(
                name=entry.name,
                success=False,
                revision=entry.revision,
                error_kind=getattr(e, "kind", type(e).__name__),
                error_message=str(e),
                output=e.output if isinstance(e, VcsCommandError) else None,
                elapsed=time.time() - start_time,
            )

        self.logger.debug(f"Fetched {entry.name} via {result.strategy}")
        return result

    def fetch_all(
        self, entries: Sequence[Entry], max_workers: Optional[int] = None
    ) -> FetchSummary:
        """
        Fetch every entry, at most ``max_workers`` at a time.

        Args:
            entries: Entries to fetch
            max_workers: Concurrency ceiling, defaults to settings.max_workers

        Returns:
            FetchSummary with one result per entry, in input order
        """
        workers = self.settings.max_workers if max_workers is None else max_workers
        if workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {workers}")
        start_time = time.time()
        self.logger.info(
            f"Fetching {len(entries)} entries (parallelism={workers})..."
        )

        run = self.profiler.run() if self.profiler else nullcontext()
        with run, ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="lockfetch"
        ) as executor:
            futures = [executor.submit(self.fetch_entry, entry) for entry in entries]
            results = [future.result() for future in futures]

        summary = FetchSummary(results, elapsed=time.time() - start_time)
        self.logger.info(
            f"Completed fetching {len(summary.succeeded)}/{len(results)} entries"
        )
        return summary


def save_summary_to_yaml(summary: FetchSummary, file_path: Union[str, Path]) -> None:
    """
    Save a fetch summary as a YAML report.
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w") as f:
        yaml.safe_dump(summary.to_dict(), f, default_flow_style=False, indent=2)

    logger.info(f"Fetch report saved to {file_path}")
