from pathlib import Path
from typing import Optional

from agents_playbook.config import WORKSPACE_ROOT


def resolve_workspace_path(relative_path: str, base: Optional[str] = None) -> str:
    """Resolve a workspace-relative path to an absolute path.

    Args:
        relative_path: The relative path to resolve
        base: Optional base directory. If not provided, uses WORKSPACE_ROOT.

    Returns:
        str: The absolute path
    """
    base_dir = base or WORKSPACE_ROOT
    return str((Path(base_dir) / relative_path).resolve())


def read_markdown(relative_path: str) -> str:
    """Read and strip a markdown file located under the workspace."""
    abs_path = resolve_workspace_path(relative_path)
    return Path(abs_path).read_text(encoding="utf-8").strip()
