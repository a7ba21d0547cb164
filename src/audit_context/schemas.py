from __future__ import annotations

import json
from pathlib import Path
from typing import Type

from pydantic import TypeAdapter

from .config import AuditConfig
from .types import ProjectAudit, RepositoryAudit


def _schema_for(cls: Type) -> dict:
    """Generate a JSON schema for a dataclass using Pydantic type adapters."""
    return TypeAdapter(cls).json_schema()


def export(output_dir: Path) -> None:
    """Export JSON schemas for the configuration and report types to *output_dir*."""
    output_dir.mkdir(parents=True, exist_ok=True)
    schemas = {
        "audit_config.schema.json": _schema_for(AuditConfig),
        "project_audit.schema.json": _schema_for(ProjectAudit),
        "repository_audit.schema.json": _schema_for(RepositoryAudit),
    }
    for name, schema in schemas.items():
        with open(output_dir / name, "w", encoding="utf-8") as f:
            json.dump(schema, f, indent=2, ensure_ascii=False)


if __name__ == "__main__":  # pragma: no cover - manual execution
    export(Path("docs/schemas"))
