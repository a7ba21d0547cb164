"""Pytest configuration and fixtures for audit-context tests."""

from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest

from audit_context.commands import CommandError, CommandRunner

IDEAL_DIRS = [
    "apps/agents",
    "apps/web-bots",
    "apps/tools",
    "libs/shared",
    "libs/typescript",
    "libs/python",
]


class FakeRunner(CommandRunner):
    """CommandRunner double with canned answers and a call log."""

    def __init__(
        self,
        tracked: Optional[List[str]] = None,
        repo: str = "acme/monorepo",
        issues: str = "12\tOPEN\tFix login flow\n",
        fail: Iterable[str] = (),
    ):
        self.tracked = tracked or []
        self.repo = repo
        self.issues = issues
        self.fail = set(fail)
        self.calls: List[tuple] = []

    def _maybe_fail(self, name: str) -> None:
        if name in self.fail:
            raise CommandError([name], 1, f"{name} unavailable")

    def tracked_files(self, root):
        self.calls.append(("tracked_files",))
        self._maybe_fail("git")
        return list(self.tracked)

    def repo_slug(self, root):
        self.calls.append(("repo_slug",))
        self._maybe_fail("gh")
        return self.repo

    def open_issues(self, root, repo):
        self.calls.append(("open_issues", repo))
        self._maybe_fail("gh-issues")
        return self.issues

    def directory_tree(self, root, path):
        self.calls.append(("directory_tree", path))
        self._maybe_fail("ls")
        return f"{path}:\nmain.py\n"


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_files(tmp_path):
    """Create files (with optional contents) below tmp_path."""
    def _make(files: Dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path
    return _make


@pytest.fixture
def ideal_repo(tmp_path) -> Path:
    """A repository whose layout matches the ideal structure exactly."""
    for rel in IDEAL_DIRS:
        (tmp_path / rel).mkdir(parents=True)
    return tmp_path
