"""Audit orchestration and Markdown rendering."""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from .checks import (
    check_directory_structure,
    check_issue_docs,
    check_non_negotiables,
    issues_root_exists,
)
from .commands import CommandRunner
from .config import AuditConfig
from .types import Finding, ProjectAudit, RepositoryAudit

logger = logging.getLogger(__name__)

SUMMARY = (
    "監査が完了しました。上記の「乖離 (Gap)」および「違反 (Violation)」を確認し、"
    "リファクタリングを検討してください。"
)


def audit_repository(
    root: Union[str, Path],
    runner: CommandRunner,
    config: Optional[AuditConfig] = None,
) -> RepositoryAudit:
    """Run every repository-wide check in order.

    Findings never stop the run; all checks complete and report together.
    """
    config = config or AuditConfig()
    audit = RepositoryAudit()
    audit.gaps = check_directory_structure(root, config.structure)
    logger.info("directory structure: %d gap(s)", len(audit.gaps))
    audit.violations = check_non_negotiables(root, runner, config)
    logger.info("non-negotiables: %d violation(s)", len(audit.violations))
    audit.issues_root_present = issues_root_exists(root, config.issue_docs)
    audit.issue_violations = check_issue_docs(root, config.issue_docs)
    logger.info("issue docs: %d violation(s)", len(audit.issue_violations))
    return audit


class MarkdownWriter:
    """Accumulates report lines, one blank line after each block."""

    def __init__(self):
        self._lines: List[str] = []

    def heading(self, level: int, text: str) -> None:
        self.block(f"{'#' * level} {text}")

    def block(self, text: str) -> None:
        self._lines.append(text)
        self._lines.append("")

    def lines(self, items: List[str]) -> None:
        self._lines.extend(items)
        self._lines.append("")

    def code(self, content: str, lang: str = "") -> None:
        longest = max((len(m) for m in re.findall(r"`+", content)), default=0)
        fence = "`" * max(3, longest + 1)
        self.lines([f"{fence}{lang}", content.rstrip("\n"), fence])

    def getvalue(self) -> str:
        return "\n".join(self._lines)


def render_project(audit: ProjectAudit, config: Optional[AuditConfig] = None) -> str:
    """Render a single-project audit as Markdown."""
    config = config or AuditConfig()
    out = MarkdownWriter()
    out.heading(1, f"Project Audit: {audit.name}")

    out.heading(2, config.project.readme)
    if audit.readme is not None:
        out.block(audit.readme.rstrip("\n"))
    else:
        out.block(f"{config.project.readme} が見つかりませんでした。")

    out.heading(2, "Project Definition File")
    if audit.manifest is not None:
        out.heading(3, audit.manifest.name)
        out.code(audit.manifest.content, audit.manifest.fence)
    else:
        names = " または ".join(m.name for m in config.project.manifests)
        out.block(f"{names} が見つかりませんでした。")

    out.heading(2, "Directory Structure")
    for dirname, tree in audit.trees.items():
        out.heading(3, f"./{dirname}")
        out.code(tree)

    out.heading(2, "Open GitHub Issues")
    if audit.issues_error is not None:
        out.block(f"> **Warning**: GitHub Issuesの取得中にエラーが発生しました: {audit.issues_error}")
    elif not audit.repo:
        out.block("GitHubリポジトリの情報を取得できませんでした。")
    else:
        out.code(audit.issues or "")

    return out.getvalue()


def _findings(out: MarkdownWriter, heading: str, findings: List[Finding], ok: str) -> None:
    if findings:
        out.heading(3, heading)
        out.lines([f.message for f in findings])
    else:
        out.block(ok)


def render_repository(audit: RepositoryAudit, config: Optional[AuditConfig] = None) -> str:
    """Render a repository-wide audit as Markdown."""
    config = config or AuditConfig()
    out = MarkdownWriter()
    out.heading(1, "Repository-wide Audit: AGENTS.md Compliance")

    out.heading(2, "1. Directory Structure Audit")
    _findings(out, "乖離 (Gaps)", audit.gaps, "ディレクトリ構造は規約に従っています。")

    out.heading(2, "2. Non-negotiables Audit")
    _findings(out, "違反 (Violations)", audit.violations, "Non-negotiables は守られています。")

    out.heading(2, "3. Issue Documentation Audit")
    if not audit.issues_root_present:
        out.block(f"`{config.issue_docs.root}/` ディレクトリが存在しません。")
    else:
        _findings(out, "違反 (Violations)", audit.issue_violations, "Issueドキュメントの構成は規約に従っています。")

    out.heading(2, "Summary")
    out.block(SUMMARY)
    return out.getvalue()
