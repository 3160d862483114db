"""
lockfetch: re-fetch pinned dependency sources from a lock manifest.

Subpackages
-----------
- fetch:       source resolution, transports, extraction and orchestration
- plugins:     click commands loaded by the CLI
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version(__name__)
except PackageNotFoundError:  # local editable install
    __version__ = "0.0.0-dev"

__all__ = [
    "fetch",
]

from . import fetch
