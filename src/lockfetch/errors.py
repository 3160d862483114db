"""
Exception types raised while resolving and fetching lock entries.

Every error carries a short ``kind`` identifier that ends up in fetch
results and YAML reports.
"""

from typing import List, Optional, Sequence


class LockfetchError(Exception):
    """
    Base class for all lockfetch errors.
    """

    kind = "error"


class ManifestError(LockfetchError):
    """
    Raised when the lock manifest is missing, unreadable or invalid.
    """

    kind = "manifest"


class NetworkError(LockfetchError):
    """
    Raised on a transport failure or a non-success HTTP status.
    """

    kind = "network"

    def __init__(
        self, message: str, url: str, status: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ArchiveError(LockfetchError):
    """
    Raised when a downloaded archive cannot be decompressed or read.
    """

    kind = "decode"


class ExtractionError(LockfetchError):
    """
    Raised when an archive member cannot be written to the target tree.
    """

    kind = "filesystem"


class DiscoveryError(LockfetchError):
    """
    Raised when an import path does not resolve to exactly one go-import tag.
    """

    kind = "discovery"

    def __init__(self, message: str, candidates: Sequence[object] = ()) -> None:
        super().__init__(message)
        self.candidates: List[object] = list(candidates)


class UnsupportedVcsError(LockfetchError):
    """
    Raised when a remote uses a version-control system other than git.
    """

    kind = "unsupported-vcs"

    def __init__(self, vcs: str) -> None:
        super().__init__(f"Unsupported VCS type: {vcs}")
        self.vcs = vcs


class VcsCommandError(LockfetchError):
    """
    Raised when the version-control client exits non-zero.

    The combined stdout/stderr of the failed command is kept in ``output``.
    """

    kind = "process"

    def __init__(
        self, message: str, argv: Sequence[str], returncode: int, output: str = ""
    ) -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.output = output

    def __str__(self) -> str:
        return (
            f"{super().__str__()} "
            f"(exit {self.returncode}: {' '.join(self.argv)})"
        )


__all__ = [
    "ArchiveError",
    "DiscoveryError",
    "ExtractionError",
    "LockfetchError",
    "ManifestError",
    "NetworkError",
    "UnsupportedVcsError",
    "VcsCommandError",
]
