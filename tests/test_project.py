"""Tests for project resolution and single-project collection."""

import pytest

from audit_context.config import ProjectConfig
from audit_context.project import ProjectNotFoundError, audit_project, resolve_project
from conftest import FakeRunner


def test_resolve_prefers_first_candidate_root(make_files):
    root = make_files({
        "apps/cli-tools/alpha/README.md": "cli",
        "apps/tmp/alpha/README.md": "tmp",
        "apps/alpha/README.md": "plain",
    })
    assert resolve_project(root, "alpha") == "apps/cli-tools/alpha"


def test_resolve_falls_back_to_apps(make_files):
    root = make_files({"apps/beta/README.md": ""})
    assert resolve_project(root, "beta") == "apps/beta"


def test_resolve_is_exact(make_files):
    root = make_files({"apps/Gamma/README.md": ""})
    with pytest.raises(ProjectNotFoundError) as excinfo:
        resolve_project(root, "gamm")
    assert excinfo.value.name == "gamm"
    assert "gamm" in str(excinfo.value)


def test_resolve_uses_configured_roots(make_files):
    root = make_files({"services/delta/README.md": ""})
    config = ProjectConfig(candidate_roots=["services"])
    assert resolve_project(root, "delta", config) == "services/delta"


def test_audit_collects_all_sections(make_files, fake_runner):
    root = make_files({
        "apps/ui-automations/shop/README.md": "# Shop\n",
        "apps/ui-automations/shop/package.json": '{"name": "shop"}\n',
        "apps/ui-automations/shop/src/index.ts": "",
    })
    audit = audit_project(root, "shop", fake_runner)

    assert audit.path == "apps/ui-automations/shop"
    assert audit.readme == "# Shop\n"
    assert audit.manifest.name == "package.json"
    assert audit.manifest.fence == "json"
    assert list(audit.trees) == ["src"]
    assert audit.repo == "acme/monorepo"
    assert "Fix login flow" in audit.issues
    assert audit.issues_error is None
    assert ("directory_tree", "apps/ui-automations/shop/src") in fake_runner.calls
    assert ("open_issues", "acme/monorepo") in fake_runner.calls


def test_package_json_wins_over_pyproject(make_files, fake_runner):
    root = make_files({
        "apps/both/package.json": "{}",
        "apps/both/pyproject.toml": "[project]\n",
    })
    audit = audit_project(root, "both", fake_runner)
    assert audit.manifest.name == "package.json"


def test_pyproject_used_when_alone(make_files, fake_runner):
    root = make_files({"apps/py/pyproject.toml": "[project]\nname = 'py'\n"})
    audit = audit_project(root, "py", fake_runner)
    assert audit.manifest.name == "pyproject.toml"
    assert "name = 'py'" in audit.manifest.content


def test_missing_readme_and_manifest(make_files, fake_runner):
    root = make_files({"apps/bare/scripts/run.sh": ""})
    audit = audit_project(root, "bare", fake_runner)
    assert audit.readme is None
    assert audit.manifest is None
    assert list(audit.trees) == ["scripts"]


def test_issue_tracker_failure_is_recorded(make_files, caplog):
    root = make_files({"apps/offline/README.md": "hi"})
    runner = FakeRunner(fail=["gh"])
    with caplog.at_level("ERROR"):
        audit = audit_project(root, "offline", runner)
    assert audit.readme == "hi"
    assert audit.issues is None
    assert "gh unavailable" in audit.issues_error
    assert "gh unavailable" in caplog.text


def test_unknown_repo_skips_issue_query(make_files):
    root = make_files({"apps/local/README.md": ""})
    runner = FakeRunner(repo="")
    audit = audit_project(root, "local", runner)
    assert audit.repo is None
    assert not any(call[0] == "open_issues" for call in runner.calls)
