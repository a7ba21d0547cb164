"""Non-negotiable repository policies.

Three independent rules feed one violation list, in this order:

* development logs must be written in Japanese (coarse kana presence test),
* no tracked file may look like a credential,
* every application source file needs a co-located test file.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from ..commands import CommandError, CommandRunner
from ..config import AuditConfig, LanguageConfig, SecretsConfig, SourceTestsConfig
from ..types import LANGUAGE, MISSING_TEST, SECRET, Finding, display_name

logger = logging.getLogger(__name__)

def check_language_policy(root: Union[str, Path], config: Optional[LanguageConfig] = None) -> List[Finding]:
    """Flag development logs without a single character matching the language pattern.

    This is a presence test, not language detection: one kana anywhere in
    the file is enough to pass.
    """
    config = config or LanguageConfig()
    logs_dir = Path(root) / config.logs_dir
    violations: List[Finding] = []
    if not logs_dir.is_dir():
        return violations

    pattern = re.compile(config.pattern)
    for log in sorted(logs_dir.iterdir(), key=lambda p: p.name):
        if not log.name.endswith(config.suffix) or not log.is_file():
            continue
        content = log.read_text(encoding='utf-8', errors='replace')
        if not pattern.search(content):
            rel = f"{config.logs_dir}/{display_name(log.name)}"
            violations.append(Finding(
                category=LANGUAGE,
                path=rel,
                message=f"- **言語違反**: `{rel}` に日本語が含まれていない可能性があります。",
            ))
    return violations


def check_secret_files(
    root: Union[str, Path],
    runner: CommandRunner,
    config: Optional[SecretsConfig] = None,
) -> List[Finding]:
    """Flag tracked paths matching any credential-like pattern.

    If version control cannot be queried there is nothing to check and no
    finding is produced.
    """
    config = config or SecretsConfig()
    try:
        tracked = runner.tracked_files(root)
    except CommandError as exc:
        logger.debug("skipping secret scan: %s", exc)
        return []

    patterns = [re.compile(p) for p in config.patterns]
    violations: List[Finding] = []
    for path in map(display_name, tracked):
        if any(p.search(path) for p in patterns):
            violations.append(Finding(
                category=SECRET,
                path=path,
                message=f"- **セキュリティリスク**: 秘密情報と思われるファイル `{path}` がリポジトリに含まれています。",
            ))
    return violations


def _is_source_file(name: str, config: SourceTestsConfig) -> bool:
    if Path(name).suffix not in config.extensions:
        return False
    if name.endswith(tuple(config.test_suffixes)) or name.startswith(tuple(config.test_prefixes)):
        return False
    return name not in config.entry_points


def _walk_sources(directory: Path, config: SourceTestsConfig, found: List[Path]) -> None:
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            if entry.name not in config.skip_dirs:
                _walk_sources(entry, config, found)
        elif _is_source_file(entry.name, config):
            found.append(entry)


def find_source_files(root: Union[str, Path], config: Optional[SourceTestsConfig] = None) -> List[Path]:
    """Collect source files below ``<apps_root>/*/<source_dir>``."""
    config = config or SourceTestsConfig()
    apps = Path(root) / config.apps_root
    found: List[Path] = []
    if not apps.is_dir():
        return found
    for app in sorted(apps.iterdir(), key=lambda p: p.name):
        src = app / config.source_dir
        if src.is_dir():
            _walk_sources(src, config, found)
    return found


def has_test_file(source: Path, config: Optional[SourceTestsConfig] = None) -> bool:
    """Return True if a sibling test file exists for *source*.

    Extensions without a configured convention never have a test.
    """
    config = config or SourceTestsConfig()
    conventions = config.test_conventions.get(source.suffix, [])
    return any((source.parent / c.format(stem=source.stem)).exists() for c in conventions)


def check_test_presence(root: Union[str, Path], config: Optional[SourceTestsConfig] = None) -> List[Finding]:
    """Flag application source files that have no co-located test."""
    config = config or SourceTestsConfig()
    root = Path(root)
    violations: List[Finding] = []
    for source in find_source_files(root, config):
        if has_test_file(source, config):
            continue
        rel = display_name(source.relative_to(root).as_posix())
        violations.append(Finding(
            category=MISSING_TEST,
            path=rel,
            message=f"- **テスト欠落**: `{rel}` に対するテストファイルが見つかりません。",
        ))
    return violations


def check_non_negotiables(
    root: Union[str, Path],
    runner: CommandRunner,
    config: Optional[AuditConfig] = None,
) -> List[Finding]:
    """Run all non-negotiable checks and concatenate their violations."""
    config = config or AuditConfig()
    violations = check_language_policy(root, config.language)
    violations += check_secret_files(root, runner, config.secrets)
    violations += check_test_presence(root, config.tests)
    return violations
