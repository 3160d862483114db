"""
Abstract base class for source fetchers.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel

from ..errors import ExtractionError
from ..manifest import Entry
from ..settings import Settings
from .sources import ResolvedSource
from .vcs import GitClient, VcsClient

logger = logging.getLogger(__name__)


class FetchResult(BaseModel):
    """
    Result of one fetch unit.
    """

    name: str
    success: bool
    path: Optional[Path] = None
    strategy: Optional[str] = None
    source: Optional[str] = None
    revision: Optional[str] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    output: Optional[str] = None
    files_written: Optional[int] = None
    elapsed: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_none=True)
        if self.path is not None:
            data["path"] = str(self.path)
        data["elapsed"] = round(self.elapsed, 3)
        return data


class BaseFetcher(ABC):
    """
    Abstract base class for fetchers implementing a pluggable architecture.

    A fetcher materializes one entry's pinned revision into
    ``settings.vendor_dir / entry.name`` from an already resolved source.
    """

    def __init__(
        self,
        entry: Entry,
        source: ResolvedSource,
        settings: Settings,
        vcs_client: Optional[VcsClient] = None,
    ):
        self.entry = entry
        self.source = source
        self.settings = settings
        self.vcs_client = vcs_client or GitClient(settings.git_binary)
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    @classmethod
    @abstractmethod
    def can_handle(cls, source: ResolvedSource) -> bool:
        """
        Check if this fetcher can handle the given resolved source.
        """
        pass

    @abstractmethod
    def fetch(self) -> FetchResult:
        """
        Fetch the entry and return the result; failures raise.
        """
        pass

    @property
    @abstractmethod
    def fetcher_type(self) -> str:
        """
        Return the type identifier for this fetcher.
        """
        pass

    @property
    def target_dir(self) -> Path:
        """
        The entry's directory below the vendor root.

        Raises:
            ExtractionError: If the name would place it anywhere else.
        """
        vendor_dir = self.settings.vendor_dir
        target = vendor_dir / self.entry.name
        root = Path(os.path.abspath(vendor_dir))
        resolved = Path(os.path.abspath(target))
        if resolved == root or root not in resolved.parents:
            raise ExtractionError(
                f"Target for {self.entry.name!r} is not below {vendor_dir}"
            )
        return target

    def _result(self, **fields: Any) -> FetchResult:
        return FetchResult(
            name=self.entry.name,
            success=True,
            path=self.target_dir,
            strategy=self.fetcher_type,
            source=self.source.describe(),
            revision=self.entry.revision,
            **fields,
        )

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(entry={self.entry.name})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(entry={self.entry!r}, source={self.source!r})"
        )
