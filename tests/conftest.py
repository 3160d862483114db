"""
Fixtures and test configuration for the lockfetch test suite.
"""

import io
import tarfile
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from lockfetch.errors import VcsCommandError
from lockfetch.fetch.vcs import VcsClient
from lockfetch.manifest import Entry
from lockfetch.settings import Settings

REVISION = "0123456789abcdef0123456789abcdef01234567"


def build_tarball(
    files: Optional[Dict[str, bytes]] = None,
    dirs: Iterable[str] = (),
    symlinks: Optional[Dict[str, str]] = None,
    wrapper: str = "W",
    mode: int = 0o644,
    mtime: int = 1_500_000_000,
) -> bytes:
    """
    Build a gzip tarball shaped like a tarball API response.

    Every path is placed under the ``wrapper`` directory.
    """
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:

        def add_dir(name: str) -> None:
            info = tarfile.TarInfo(name + "/")
            info.type = tarfile.DIRTYPE
            info.mode = 0o755
            info.mtime = mtime
            tar.addfile(info)

        add_dir(wrapper)
        for name in dirs:
            add_dir(f"{wrapper}/{name}")
        for name, data in (files or {}).items():
            info = tarfile.TarInfo(f"{wrapper}/{name}")
            info.size = len(data)
            info.mode = mode
            info.mtime = mtime
            tar.addfile(info, io.BytesIO(data))
        for name, target in (symlinks or {}).items():
            info = tarfile.TarInfo(f"{wrapper}/{name}")
            info.type = tarfile.SYMTYPE
            info.linkname = target
            info.mtime = mtime
            tar.addfile(info)
    return buf.getvalue()


class FakeVcsClient(VcsClient):
    """In-process VCS client recording every call."""

    def __init__(self, fail_on: Optional[str] = None, output: str = ""):
        self.fail_on = fail_on
        self.output = output
        self.calls: List[Tuple[str, ...]] = []

    def clone(self, url: str, target_dir: Path) -> str:
        self.calls.append(("clone", url, str(target_dir)))
        target_dir.mkdir(parents=True)
        (target_dir / "README.md").write_text(f"cloned from {url}\n")
        if self.fail_on == "clone":
            raise VcsCommandError(
                "Git command failed.",
                argv=["git", "clone", url, str(target_dir)],
                returncode=128,
                output="fatal: repository not found\n",
            )
        return self.output

    def reset_hard(self, target_dir: Path, revision: str) -> str:
        self.calls.append(("reset", str(target_dir), revision))
        if self.fail_on == "reset":
            raise VcsCommandError(
                "Git command failed.",
                argv=["git", "reset", "--hard", revision],
                returncode=128,
                output=f"fatal: ambiguous argument '{revision}'\n",
            )
        return f"HEAD is now at {revision[:7]}\n"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def test_settings(temp_dir):
    """Create test settings rooted in a temporary directory."""
    return Settings(root_dir=temp_dir, log_level="DEBUG", max_workers=2)


@pytest.fixture
def archive_entry():
    """An entry served by the tarball API."""
    return Entry(
        name="github.com/pkg/errors",
        revision=REVISION,
        version="v0.8.1",
        packages=["."],
    )


@pytest.fixture
def raw_entry():
    """An entry that has to be cloned."""
    return Entry(
        name="gopkg.in/yaml.v2",
        revision=REVISION,
        packages=["."],
    )


@pytest.fixture
def make_tarball():
    """Factory building API-shaped tarballs."""
    return build_tarball


@pytest.fixture
def fake_vcs():
    """A fake VCS client that succeeds."""
    return FakeVcsClient()


@pytest.fixture
def lock_file(temp_dir):
    """A small Gopkg.lock in the temporary root."""
    path = temp_dir / "Gopkg.lock"
    path.write_text(
        f"""# This file is autogenerated, do not edit; changes may be undone.

[[projects]]
  branch = "master"
  digest = "1:abc"
  name = "github.com/pkg/errors"
  packages = ["."]
  revision = "{REVISION}"

[[projects]]
  name = "gopkg.in/yaml.v2"
  packages = ["."]
  revision = "{REVISION}"
  version = "v2.2.1"

[[projects]]
  name = "golang.org/x/net"
  packages = ["context", "http2/hpack"]
  revision = "{REVISION}"
  source = "https://go.googlesource.com/net"

[solve-meta]
  analyzer-name = "dep"
  analyzer-version = 1
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_vcs():
    """Factory for fake VCS clients that fail at a given step."""
    return FakeVcsClient
