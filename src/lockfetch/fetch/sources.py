"""
Resolved source variants and pure source classification.

Classification priority, first match wins:

1. ``github.com/<owner>/<repo>``  -> :class:`ArchiveRepo`
2. ``gopkg.in/...``               -> :class:`RawRemote` over https
3. anything else                  -> :class:`Unresolved` (needs discovery)
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

GITHUB_PATTERN = re.compile(r"github\.com/(?P<owner>[^/ \n]+)/(?P<repo>[^/ \n]+)")
GOPKG_PATTERN = re.compile(r"gopkg\.in/(.+)")


@dataclass(frozen=True)
class ArchiveRepo:
    """
    A repository served by the tarball API.
    """

    owner: str
    repo: str

    kind = "archive"

    def describe(self) -> str:
        return f"github.com/{self.owner}/{self.repo}"


@dataclass(frozen=True)
class RawRemote:
    """
    A remote that has to be cloned with a version-control client.
    """

    url: str
    vcs: str = "git"

    kind = "raw"

    def describe(self) -> str:
        return self.url


@dataclass(frozen=True)
class Unresolved:
    """
    An import path whose remote is only known after discovery.
    """

    import_path: str

    kind = "discovery"

    def describe(self) -> str:
        return self.import_path


ResolvedSource = Union[ArchiveRepo, RawRemote, Unresolved]


def match_archive_repo(source: str) -> Optional[ArchiveRepo]:
    """
    Return the archive repo embedded in ``source``, if any.
    """
    match = GITHUB_PATTERN.search(source)
    if match is None:
        return None
    return ArchiveRepo(owner=match.group("owner"), repo=match.group("repo"))


def https_url(source: str) -> str:
    if source.startswith("https://"):
        return source
    return "https://" + source


def classify_source(source: str) -> ResolvedSource:
    """
    Classify a source string without any network access.
    """
    archive = match_archive_repo(source)
    if archive is not None:
        return archive

    if GOPKG_PATTERN.search(source):
        return RawRemote(url=https_url(source))

    return Unresolved(import_path=source)
