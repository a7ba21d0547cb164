"""Single-project audit: locate a project and gather its context."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from .commands import CommandError, CommandRunner
from .config import ProjectConfig
from .types import Manifest, ProjectAudit, display_name

logger = logging.getLogger(__name__)


class ProjectNotFoundError(LookupError):
    """No candidate root contains a project with the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'エラー: プロジェクト "{display_name(name)}" が見つかりませんでした。')


def resolve_project(root: Union[str, Path], name: str, config: Optional[ProjectConfig] = None) -> str:
    """Return the repository-relative path of project *name*.

    Candidate roots are tried in order and the first existing match wins,
    even when a later root holds a project of the same name.

    Raises:
        ProjectNotFoundError: if no candidate exists
    """
    config = config or ProjectConfig()
    root = Path(root)
    for parent in config.candidate_roots:
        candidate = PurePosixPath(parent, name)
        if (root / candidate).exists():
            logger.debug("resolved project %s to %s", name, candidate)
            return candidate.as_posix()
    raise ProjectNotFoundError(name)


def _read_text(path: Path) -> str:
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()


def read_manifest(project_dir: Path, config: ProjectConfig) -> Optional[Manifest]:
    """Return the first configured manifest present in *project_dir*."""
    for spec in config.manifests:
        path = project_dir / spec.name
        if path.exists():
            return Manifest(name=spec.name, content=_read_text(path), fence=spec.fence)
    return None


def audit_project(
    root: Union[str, Path],
    name: str,
    runner: CommandRunner,
    config: Optional[ProjectConfig] = None,
) -> ProjectAudit:
    """Gather README, manifest, directory trees and open issues for *name*.

    Args:
        root: Repository root
        name: Project directory name
        runner: Provider of directory listings and issue tracker access
        config: Project lookup tables

    Raises:
        ProjectNotFoundError: if the project cannot be resolved
    """
    config = config or ProjectConfig()
    root = Path(root)
    rel = resolve_project(root, name, config)
    project_dir = root / rel

    audit = ProjectAudit(name=display_name(name), path=display_name(rel))

    readme = project_dir / config.readme
    if readme.exists():
        audit.readme = _read_text(readme)

    audit.manifest = read_manifest(project_dir, config)

    for dirname in config.tree_dirs:
        if (project_dir / dirname).exists():
            audit.trees[dirname] = runner.directory_tree(root, f"{rel}/{dirname}")

    # Issue tracker failures degrade the report instead of aborting it.
    try:
        audit.repo = runner.repo_slug(root) or None
        if audit.repo:
            audit.issues = runner.open_issues(root, audit.repo)
    except CommandError as exc:
        logger.error("GitHub Issuesの取得中にエラーが発生しました: %s", exc.stderr.strip() or exc)
        audit.issues_error = str(exc)

    return audit
