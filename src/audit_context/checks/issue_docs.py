"""Issue documentation completeness."""

from pathlib import Path
from typing import List, Optional, Union

from ..config import IssueDocsConfig
from ..types import MISSING_DOC, Finding, display_name


def issues_root_exists(root: Union[str, Path], config: Optional[IssueDocsConfig] = None) -> bool:
    config = config or IssueDocsConfig()
    return (Path(root) / config.root).is_dir()


def check_issue_docs(root: Union[str, Path], config: Optional[IssueDocsConfig] = None) -> List[Finding]:
    """Report one violation per required document missing from an issue directory.

    Plain files directly under the issues root are ignored. A missing
    issues root, or a plain file in its place, yields no findings; callers
    distinguish that case with :func:`issues_root_exists`.
    """
    config = config or IssueDocsConfig()
    issues_dir = Path(root) / config.root
    violations: List[Finding] = []
    if not issues_dir.is_dir():
        return violations

    for issue in sorted(issues_dir.iterdir(), key=lambda p: p.name):
        if not issue.is_dir():
            continue
        for required in config.required:
            if not (issue / required).exists():
                rel = f"{config.root}/{display_name(issue.name)}/{required}"
                violations.append(Finding(
                    category=MISSING_DOC,
                    path=rel,
                    message=f"- **ドキュメント欠落**: `{rel}` が存在しません。",
                ))
    return violations
