"""
Lock manifest models and loading.

The manifest is a ``Gopkg.lock`` TOML document holding a ``[[projects]]``
array. Only the fields needed to re-fetch a pinned revision are modelled;
everything else in the document is ignored.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path, PurePath
from typing import FrozenSet, Iterable, List, Optional, Union

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import ManifestError

logger = logging.getLogger(__name__)


class Entry(BaseModel):
    """
    One pinned dependency from the lock manifest.
    """

    name: str = Field(..., description="Import path, also the vendor subdirectory")
    branch: Optional[str] = Field(None, description="Branch the revision came from")
    revision: str = Field(..., description="Commit identifier to fetch")
    version: Optional[str] = Field(None, description="Informational version label")
    source: Optional[str] = Field(None, description="Explicit remote overriding name")
    packages: List[str] = Field(
        default_factory=list, description="Package directories to retain"
    )

    model_config = {"frozen": True}

    @field_validator("name", "revision")
    @classmethod
    def require_non_empty(cls, v: str, info) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v.strip()

    @field_validator("name")
    @classmethod
    def require_relative_name(cls, v: str) -> str:
        """
        The name becomes a directory below the vendor root; it must not be
        absolute, climb out with ``..`` or name the vendor root itself.
        """
        parts = v.replace("\\", "/").split("/")
        if v.startswith(("/", "\\")) or PurePath(v).drive:
            raise ValueError(f"name must be a relative import path: {v!r}")
        if ".." in parts:
            raise ValueError(f"name must not contain '..' segments: {v!r}")
        if all(part in ("", ".") for part in parts):
            raise ValueError(f"name does not name a directory: {v!r}")
        return v

    @property
    def source_path(self) -> str:
        """
        The string the resolver classifies: ``source`` if set, else ``name``.
        """
        return self.source or self.name

    @property
    def allow_set(self) -> FrozenSet[str]:
        """
        Top-level directory names to keep during extraction.

        ``"."`` stands for the root package and maps to the empty name; a
        nested package contributes its first path segment. An empty set
        keeps everything.
        """
        names = set()
        for package in self.packages:
            package = package.strip().strip("/")
            if package in ("", "."):
                names.add("")
            else:
                names.add(package.split("/", 1)[0])
        return frozenset(names)


class LockManifest(BaseModel):
    """
    Parsed lock manifest: an ordered list of entries.
    """

    projects: List[Entry] = Field(default_factory=list)

    @model_validator(mode="after")
    def require_unique_names(self) -> "LockManifest":
        # each name owns vendor/<name>; two units must never share a target
        seen = set()
        duplicates = []
        for name in self.names():
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise ValueError(f"Duplicate entry names: {', '.join(duplicates)}")
        return self

    def names(self) -> List[str]:
        return [entry.name for entry in self.projects]

    def select(self, names: Iterable[str]) -> List[Entry]:
        """
        Return the entries with the given names, in manifest order.

        Raises:
            ManifestError: If any name is not in the manifest.
        """
        wanted = list(names)
        known = set(self.names())
        unknown = [name for name in wanted if name not in known]
        if unknown:
            raise ManifestError(
                f"Unknown entries: {', '.join(unknown)}; "
                f"available: {', '.join(self.names()) or 'none'}"
            )
        return [entry for entry in self.projects if entry.name in set(wanted)]


def load_lock(file_path: Union[str, Path]) -> LockManifest:
    """
    Load and validate a lock manifest from a TOML file.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise ManifestError(f"Lock file not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ManifestError(f"Failed to read lock file {file_path}: {e}") from e

    try:
        manifest = LockManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(f"Invalid lock file {file_path}: {e}") from e

    logger.debug(f"Loaded {len(manifest.projects)} entries from {file_path}")
    return manifest
