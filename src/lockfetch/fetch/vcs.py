"""
Version-control client used by the raw clone fetcher.

:class:`VcsClient` is the seam tests replace with an in-process fake;
:class:`GitClient` shells out to the git binary.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..errors import VcsCommandError

logger = logging.getLogger(__name__)


class VcsClient(ABC):
    """
    Clone a remote and pin its working tree to a revision.
    """

    vcs = "git"

    @abstractmethod
    def clone(self, url: str, target_dir: Path) -> str:
        """
        Clone ``url`` into ``target_dir`` and return the command output.
        """
        pass

    @abstractmethod
    def reset_hard(self, target_dir: Path, revision: str) -> str:
        """
        Hard-reset the working tree in ``target_dir`` to ``revision``.
        """
        pass


class GitClient(VcsClient):
    """
    VCS client that runs the ``git`` executable.
    """

    def __init__(self, git_binary: str = "git"):
        self.git_binary = git_binary

    def clone(self, url: str, target_dir: Path) -> str:
        return self._run(["clone", url, str(target_dir)])

    def reset_hard(self, target_dir: Path, revision: str) -> str:
        return self._run(["reset", "--hard", revision], cwd=target_dir)

    def _run(self, argv: List[str], cwd: Optional[Path] = None) -> str:
        command = [self.git_binary, *argv]
        logger.debug(f"Running {' '.join(command)} (cwd={cwd})")
        try:
            completed = subprocess.run(
                command,
                cwd=cwd,
                check=False,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            )
        except OSError as e:
            raise VcsCommandError(
                f"Failed to run {self.git_binary}: {e}", argv=command, returncode=-1
            ) from e
        if completed.returncode != 0:
            raise VcsCommandError(
                "Git command failed.",
                argv=command,
                returncode=completed.returncode,
                output=completed.stdout or "",
            )
        return completed.stdout or ""
