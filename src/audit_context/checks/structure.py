"""Directory layout conformance."""

from pathlib import Path
from typing import List, Optional, Union

from ..config import StructureConfig
from ..types import MISPLACED, MISSING, Finding, display_name


def check_directory_structure(root: Union[str, Path], config: Optional[StructureConfig] = None) -> List[Finding]:
    """Compare the repository against the ideal layout.

    Every absent ideal path is a ``missing`` gap; every directory directly
    under the applications root whose name is not allow-listed is a
    ``misplaced`` gap.
    """
    config = config or StructureConfig()
    root = Path(root)
    gaps: List[Finding] = []

    for rel, description in config.ideal.items():
        if not (root / rel).exists():
            gaps.append(Finding(
                category=MISSING,
                path=rel,
                message=f"- **欠落**: `{rel}` ({description}) が存在しません。",
            ))

    apps = root / config.apps_root
    if apps.is_dir():
        suggested = ", ".join(config.suggested_apps)
        for entry in sorted(apps.iterdir(), key=lambda p: p.name):
            if entry.is_dir() and entry.name not in config.allowed_apps:
                rel = f"{config.apps_root}/{display_name(entry.name)}"
                gaps.append(Finding(
                    category=MISPLACED,
                    path=rel,
                    message=(
                        f"- **配置不適切**: `{rel}` は理想の構造に含まれていません。"
                        f"適切なサブディレクトリ（{suggested}等）への移動を検討してください。"
                    ),
                ))

    return gaps
