"""audit-context: static audits of a polyglot monorepo.

Two reports are produced: a context dump for a single project (README,
manifest, source trees, open GitHub issues) and a repository-wide
compliance audit (directory layout, non-negotiable policies, issue
documentation).
"""

__version__ = "0.1.0"

from audit_context.commands import CommandError, CommandRunner, SubprocessRunner
from audit_context.config import AuditConfig, get_default_config
from audit_context.project import ProjectNotFoundError, audit_project, resolve_project
from audit_context.report import audit_repository, render_project, render_repository

__all__ = [
    "AuditConfig",
    "get_default_config",
    "CommandError",
    "CommandRunner",
    "SubprocessRunner",
    "ProjectNotFoundError",
    "resolve_project",
    "audit_project",
    "audit_repository",
    "render_project",
    "render_repository",
]
