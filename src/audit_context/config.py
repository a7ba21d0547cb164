"""Configuration management for audit-context.

Every naming convention the auditor relies on lives here as an ordered
table so each check can be exercised against a different policy in tests.
"""

import copy
import dataclasses
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml


class ConfigError(ValueError):
    """Raised when a configuration file cannot be turned into an AuditConfig."""


@dataclass
class ManifestSpec:
    """A recognised project manifest file."""
    name: str
    fence: str = ""


@dataclass
class ProjectConfig:
    """Configuration for single-project audits."""
    # Searched in order; the first existing <root>/<name> wins.
    candidate_roots: List[str] = field(default_factory=lambda: [
        "apps/ui-automations",
        "apps/cli-tools",
        "apps/tmp",
        "apps",
    ])
    readme: str = "README.md"
    manifests: List[ManifestSpec] = field(default_factory=lambda: [
        ManifestSpec(name="package.json", fence="json"),
        ManifestSpec(name="pyproject.toml", fence="toml"),
    ])
    tree_dirs: List[str] = field(default_factory=lambda: ["src", "scripts"])


@dataclass
class StructureConfig:
    """Ideal repository layout."""
    ideal: Dict[str, str] = field(default_factory=lambda: {
        "apps/agents": "Standalone AI agents",
        "apps/web-bots": "Browser automation entry points",
        "apps/tools": "Internal workspace CLI tools",
        "libs/shared": "Cross-language utilities",
        "libs/typescript": "TS-specific Page Objects",
        "libs/python": "Python-specific data logic",
    })
    apps_root: str = "apps"
    allowed_apps: List[str] = field(default_factory=lambda: ["agents", "web-bots", "tools", "infra"])
    # Named in the relocation hint for misplaced app directories
    suggested_apps: List[str] = field(default_factory=lambda: ["agents", "web-bots", "tools"])


@dataclass
class LanguageConfig:
    """Language policy for development logs."""
    logs_dir: str = "development_logs"
    suffix: str = ".md"
    # Hiragana and katakana blocks
    pattern: str = r"[\u3040-\u309F\u30A0-\u30FF]"


@dataclass
class SecretsConfig:
    """Filename patterns that look like committed credentials."""
    patterns: List[str] = field(default_factory=lambda: [
        r"\.env$",
        r"\.key$",
        r"\.pem$",
        r"credentials/",
    ])


@dataclass
class SourceTestsConfig:
    """Rules for the co-located test file mandate."""
    apps_root: str = "apps"
    source_dir: str = "src"
    extensions: List[str] = field(default_factory=lambda: [".ts", ".py"])
    skip_dirs: List[str] = field(default_factory=lambda: ["node_modules", "__pycache__"])
    entry_points: List[str] = field(default_factory=lambda: ["index.ts", "__init__.py"])
    # Names that mark a file as a test rather than a source file
    test_suffixes: List[str] = field(default_factory=lambda: [".test.ts", ".spec.ts"])
    test_prefixes: List[str] = field(default_factory=lambda: ["test_"])
    # Sibling names that count as the test for a source file, by extension
    test_conventions: Dict[str, List[str]] = field(default_factory=lambda: {
        ".ts": ["{stem}.test.ts", "{stem}.spec.ts"],
        ".py": ["test_{stem}.py"],
    })


@dataclass
class IssueDocsConfig:
    """Required planning documents per issue directory."""
    root: str = "docs/issues"
    required: List[str] = field(default_factory=lambda: ["requirements.md", "design.md", "tasks.md"])


@dataclass
class CommandsConfig:
    """External command settings."""
    git: str = "git"
    gh: str = "gh"
    ls: str = "ls"
    timeout: Optional[float] = None  # None waits forever


@dataclass
class AuditConfig:
    """Top-level audit configuration."""
    project: ProjectConfig = field(default_factory=ProjectConfig)
    structure: StructureConfig = field(default_factory=StructureConfig)
    language: LanguageConfig = field(default_factory=LanguageConfig)
    secrets: SecretsConfig = field(default_factory=SecretsConfig)
    tests: SourceTestsConfig = field(default_factory=SourceTestsConfig)
    issue_docs: IssueDocsConfig = field(default_factory=IssueDocsConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'AuditConfig':
        """Load configuration from a YAML file."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: {exc}") from exc
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict) -> 'AuditConfig':
        """Create an AuditConfig from a dictionary, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ConfigError("configuration root must be a mapping")

        def create_instance(klass, d):
            if d is None:
                return klass()
            if not isinstance(d, dict):
                raise ConfigError(f"section for {klass.__name__} must be a mapping")
            names = {f.name for f in dataclasses.fields(klass) if f.init}
            filtered = {k: v for k, v in d.items() if k in names}
            try:
                return klass(**filtered)
            except TypeError as exc:
                raise ConfigError(f"{klass.__name__}: {exc}") from exc

        project = create_instance(ProjectConfig, data.get('project'))
        project.manifests = [
            m if isinstance(m, ManifestSpec) else create_instance(ManifestSpec, m)
            for m in project.manifests
        ]

        cfg = cls(
            project=project,
            structure=create_instance(StructureConfig, data.get('structure')),
            language=create_instance(LanguageConfig, data.get('language')),
            secrets=create_instance(SecretsConfig, data.get('secrets')),
            tests=create_instance(SourceTestsConfig, data.get('tests')),
            issue_docs=create_instance(IssueDocsConfig, data.get('issue_docs')),
            commands=create_instance(CommandsConfig, data.get('commands')),
        )
        cfg.validate()
        return cfg

    def validate(self) -> None:
        """Compile every configured pattern once so bad regexes fail early."""
        for pattern in [self.language.pattern, *self.secrets.patterns]:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(f"invalid pattern {pattern!r}: {exc}") from exc

    def to_dict(self) -> dict:
        """Convert the configuration to a dictionary."""
        return dataclasses.asdict(self)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save the configuration to a YAML file."""
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)


# Default configuration
default_config = AuditConfig()


def get_default_config() -> AuditConfig:
    """Get a deep copy of the default configuration."""
    return copy.deepcopy(default_config)
