"""External command access for audit-context (git, gh, ls)."""

from __future__ import annotations
import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import CommandsConfig

# Configure logging
logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """An external command could not be started or exited non-zero."""

    def __init__(self, args: Sequence[str], returncode: Optional[int] = None, stderr: str = ""):
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or "command failed"
        super().__init__(f"{' '.join(self.command)}: {detail}")


class CommandRunner:
    """Capabilities the auditor needs from the outside world.

    Tests substitute their own subclass so no real process is started.
    """

    def tracked_files(self, root: Union[str, Path]) -> List[str]:
        """List the paths tracked by version control under *root*.

        Args:
            root: Repository root, used as working directory

        Returns:
            Repository-relative POSIX paths
        """
        raise NotImplementedError

    def repo_slug(self, root: Union[str, Path]) -> str:
        """Return ``owner/name`` of the hosted repository, or ``""`` if unknown."""
        raise NotImplementedError

    def open_issues(self, root: Union[str, Path], repo: str) -> str:
        """Return the issue tracker's listing of open issues for *repo*."""
        raise NotImplementedError

    def directory_tree(self, root: Union[str, Path], path: str) -> str:
        """Return a recursive listing of *path*, given relative to *root*."""
        raise NotImplementedError


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by the real git, gh and ls executables."""

    def __init__(self, config: Optional[CommandsConfig] = None):
        self.config = config or CommandsConfig()

    def run(self, args: Sequence[str], cwd: Union[str, Path, None] = None) -> str:
        """Run *args* and return its stdout.

        Raises:
            CommandError: if the executable is missing, times out or exits non-zero
        """
        logger.debug("running %s (cwd=%s)", " ".join(args), cwd)
        try:
            result = subprocess.run(
                list(args),
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
                timeout=self.config.timeout,
            )
        except FileNotFoundError as exc:
            raise CommandError(args, stderr=str(exc)) from exc
        except subprocess.CalledProcessError as exc:
            raise CommandError(args, exc.returncode, exc.stderr or "") from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandError(args, stderr=f"timed out after {exc.timeout}s") from exc
        return result.stdout

    def tracked_files(self, root: Union[str, Path]) -> List[str]:
        out = self.run([self.config.git, "ls-files"], cwd=root)
        return [line for line in out.split("\n") if line]

    def repo_slug(self, root: Union[str, Path]) -> str:
        gh = self.config.gh
        owner = self.run([gh, "repo", "view", "--json", "owner", "-q", ".owner.login"], cwd=root).strip()
        name = self.run([gh, "repo", "view", "--json", "name", "-q", ".name"], cwd=root).strip()
        if not owner or not name:
            return ""
        return f"{owner}/{name}"

    def open_issues(self, root: Union[str, Path], repo: str) -> str:
        return self.run([self.config.gh, "issue", "list", "--repo", repo, "--state", "open"], cwd=root)

    def directory_tree(self, root: Union[str, Path], path: str) -> str:
        return self.run([self.config.ls, "-R", path], cwd=root)
