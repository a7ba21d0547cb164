from pathlib import Path

import pytest

from audit_context.config import AuditConfig, ConfigError, ManifestSpec, get_default_config


def test_default_tables_are_ordered():
    cfg = get_default_config()
    assert cfg.project.candidate_roots == ["apps/ui-automations", "apps/cli-tools", "apps/tmp", "apps"]
    assert [m.name for m in cfg.project.manifests] == ["package.json", "pyproject.toml"]
    assert list(cfg.structure.ideal) == [
        "apps/agents", "apps/web-bots", "apps/tools", "libs/shared", "libs/typescript", "libs/python",
    ]
    assert cfg.issue_docs.required == ["requirements.md", "design.md", "tasks.md"]
    assert cfg.structure.suggested_apps == ["agents", "web-bots", "tools"]
    assert cfg.tests.test_conventions == {".ts": ["{stem}.test.ts", "{stem}.spec.ts"], ".py": ["test_{stem}.py"]}
    assert cfg.commands.timeout is None


def test_get_default_config_returns_copy():
    cfg = get_default_config()
    cfg.structure.allowed_apps.append("extra")
    assert "extra" not in get_default_config().structure.allowed_apps


def test_from_dict_overrides_and_ignores_unknown_keys():
    cfg = AuditConfig.from_dict({
        "project": {"manifests": [{"name": "Cargo.toml", "fence": "toml"}], "bogus": 1},
        "issue_docs": {"root": "planning"},
        "unknown_section": {},
    })
    assert cfg.project.manifests == [ManifestSpec(name="Cargo.toml", fence="toml")]
    assert cfg.project.readme == "README.md"
    assert cfg.issue_docs.root == "planning"
    assert cfg.issue_docs.required == ["requirements.md", "design.md", "tasks.md"]


def test_invalid_pattern_rejected():
    with pytest.raises(ConfigError):
        AuditConfig.from_dict({"secrets": {"patterns": ["(unclosed"]}})


def test_non_mapping_section_rejected():
    with pytest.raises(ConfigError):
        AuditConfig.from_dict({"structure": ["apps"]})


def test_manifest_without_name_rejected():
    with pytest.raises(ConfigError):
        AuditConfig.from_dict({"project": {"manifests": [{"fence": "json"}]}})


def test_yaml_file_round_trip(tmp_path: Path):
    path = tmp_path / "audit.yaml"
    cfg = get_default_config()
    cfg.structure.allowed_apps = ["agents"]
    cfg.to_yaml(path)

    loaded = AuditConfig.from_yaml(path)
    assert loaded.structure.allowed_apps == ["agents"]
    assert loaded.language.pattern == cfg.language.pattern


def test_empty_yaml_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert AuditConfig.from_yaml(path) == get_default_config()


def test_malformed_yaml(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("project: [unclosed\n")
    with pytest.raises(ConfigError):
        AuditConfig.from_yaml(path)
