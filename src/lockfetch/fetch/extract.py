"""
Materialize a revision tarball into a vendor directory.

Tarball services wrap every revision in one synthetic top-level directory
(``owner-repo-sha/``). That segment is always stripped; the allow-set is
checked against the next segment only.
"""

from __future__ import annotations

import io
import logging
import os
import shutil
import tarfile
import zlib
from pathlib import Path, PurePosixPath
from typing import AbstractSet, Optional

from ..errors import ArchiveError, ExtractionError

logger = logging.getLogger(__name__)


def remove_tree(path: Path) -> None:
    """
    Remove ``path`` recursively if present.
    """
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.exists():
            shutil.rmtree(path)
    except OSError as e:
        raise ExtractionError(f"Failed to remove {path}: {e}") from e


def reset_directory(path: Path) -> None:
    """
    Remove ``path`` recursively if present and recreate it empty.
    """
    remove_tree(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExtractionError(f"Failed to create {path}: {e}") from e


def member_target(
    member: tarfile.TarInfo, allow_set: AbstractSet[str] = frozenset()
) -> Optional[PurePosixPath]:
    """
    Compute the wrapper-relative path for ``member``, or None to skip it.

    Members directly below the wrapper that are files are always kept.
    Anything inside (or being) a child directory is kept only when the
    child's name is in ``allow_set``; an empty set keeps everything.
    """
    segments = [part for part in member.name.split("/") if part]
    rest = segments[1:]
    if not rest:
        return None

    if allow_set and (len(rest) > 1 or member.isdir()):
        if rest[0] not in allow_set:
            return None

    if member.name.startswith("/") or ".." in rest:
        logger.warning("Skipping unsafe archive member: %s", member.name)
        return None

    return PurePosixPath(*rest)


def extract_archive(
    payload: bytes,
    target_dir: Path,
    allow_set: AbstractSet[str] = frozenset(),
    verbose: bool = False,
) -> int:
    """
    Replace ``target_dir`` with the filtered contents of a ``.tar.gz`` payload.

    Args:
        payload: Complete gzip-compressed tar stream
        target_dir: Directory to (re)create and populate
        allow_set: Child directory names to retain, empty keeps all
        verbose: Log every written path

    Returns:
        Number of members written

    Raises:
        ArchiveError: If the payload is not a readable gzip tar stream
        ExtractionError: If a member cannot be written
    """
    reset_directory(target_dir)
    root = target_dir.resolve()
    written = 0

    try:
        with tarfile.open(fileobj=io.BytesIO(payload), mode="r|gz") as tar:
            for member in tar:
                relative = member_target(member, allow_set)
                if relative is None:
                    continue

                target = target_dir.joinpath(*relative.parts)
                if not _stays_within(member, target, root):
                    logger.warning(
                        "Skipping archive member escaping %s: %s",
                        target_dir,
                        member.name,
                    )
                    continue
                if verbose:
                    logger.info("Writing: %s", target)

                _write_member(tar, member, target)
                _restore_times(member, target)
                written += 1
    except (tarfile.TarError, EOFError, zlib.error) as e:
        raise ArchiveError(f"Failed to read archive for {target_dir}: {e}") from e

    return written


def _write_member(tar: tarfile.TarFile, member: tarfile.TarInfo, target: Path) -> None:
    try:
        if member.isreg():
            target.parent.mkdir(parents=True, exist_ok=True)
            flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
            fd = os.open(target, flags, member.mode & 0o7777)
            with os.fdopen(fd, "wb") as out:
                source = tar.extractfile(member)
                if source is not None:
                    shutil.copyfileobj(source, out)
        elif member.isdir():
            target.mkdir(parents=True, exist_ok=True)
        elif member.issym():
            # link lives at the member's own path and points at its linkname
            target.parent.mkdir(parents=True, exist_ok=True)
            os.symlink(member.linkname, target)
        else:
            raise ExtractionError(
                f"Unsupported archive member type {member.type!r}: {member.name}"
            )
    except OSError as e:
        raise ExtractionError(f"Failed to write {target}: {e}") from e


def _restore_times(member: tarfile.TarInfo, target: Path) -> None:
    mtime = float(member.mtime)
    atime = float(member.pax_headers.get("atime", mtime))
    try:
        os.utime(target, (atime, mtime), follow_symlinks=not member.issym())
    except (OSError, NotImplementedError):
        pass


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root)
    except (ValueError, OSError, RuntimeError):
        return False
    return True


def _stays_within(member: tarfile.TarInfo, target: Path, root: Path) -> bool:
    """
    Check that writing ``member`` at ``target`` cannot touch anything outside
    ``root``, following links already extracted.
    """
    if not _is_within(target.parent, root):
        return False
    if member.issym():
        return _is_within(target.parent / member.linkname, root)
    return _is_within(target, root)
