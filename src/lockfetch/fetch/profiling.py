"""
CPU profiling of fetch units running on worker threads.

Before Python 3.12 a ``cProfile`` profiler only sees the thread that enabled
it, so every unit gets its own profiler and the results are merged. From 3.12
profilers hook ``sys.monitoring``, which sees every thread but admits a single
active profiler, so one profiler covers the whole run.
"""

import cProfile
import logging
import pstats
import sys
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Union

logger = logging.getLogger(__name__)


class UnitProfiler:
    """
    Collects the CPU profile of a fetch run across worker threads.
    """

    all_threads = sys.version_info >= (3, 12)

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._profiles: List[cProfile.Profile] = []

    @contextmanager
    def run(self) -> Iterator[None]:
        """
        Wrap a whole run; profiles it when one profiler sees every thread.
        """
        if self.all_threads:
            with self._profiling():
                yield
        else:
            yield

    @contextmanager
    def unit(self) -> Iterator[None]:
        """
        Wrap one unit on its worker thread; profiles it otherwise.
        """
        if self.all_threads:
            yield
        else:
            with self._profiling():
                yield

    @contextmanager
    def _profiling(self) -> Iterator[None]:
        profiler = cProfile.Profile()
        profiler.enable()
        try:
            yield
        finally:
            profiler.disable()
            with self._lock:
                self._profiles.append(profiler)

    def stats(self) -> pstats.Stats:
        """
        Merge every collected profile into one ``pstats.Stats``.
        """
        with self._lock:
            profiles = list(self._profiles)
        stats = pstats.Stats()
        for profile in profiles:
            stats.add(profile)
        return stats

    def dump_stats(self, file_path: Union[str, Path]) -> None:
        self.stats().dump_stats(str(file_path))
        logger.info(f"CPU profile written to {file_path}")
