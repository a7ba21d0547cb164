from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

# Gap categories
MISSING = "missing"
MISPLACED = "misplaced"

# Violation categories
LANGUAGE = "language"
SECRET = "secret"
MISSING_TEST = "missing-test"
MISSING_DOC = "missing-doc"


def display_name(name: str) -> str:
    """Return *name* with undecodable file-system bytes replaced by U+FFFD."""
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


@dataclass
class Finding:
    """One detected gap or violation, already phrased as a report bullet."""

    category: str
    path: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class Manifest:
    """Contents of the project manifest that was found first."""

    name: str
    content: str
    fence: str = ""


@dataclass
class ProjectAudit:
    """Everything gathered about a single project."""

    name: str
    path: str
    readme: Optional[str] = None
    manifest: Optional[Manifest] = None
    # Directory name -> recursive listing, in configured order
    trees: Dict[str, str] = field(default_factory=dict)
    repo: Optional[str] = None
    issues: Optional[str] = None
    issues_error: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RepositoryAudit:
    """Findings of the repository-wide compliance audit."""

    gaps: List[Finding] = field(default_factory=list)
    violations: List[Finding] = field(default_factory=list)
    issue_violations: List[Finding] = field(default_factory=list)
    issues_root_present: bool = True

    @property
    def clean(self) -> bool:
        """True when no check reported anything."""
        return not (self.gaps or self.violations or self.issue_violations)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["clean"] = self.clean
        return data
