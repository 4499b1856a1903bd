import os
import re

from agents_playbook import config

_SAFE_ID = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]*")


def is_safe_id(item_id: str) -> bool:
    """Check that an identifier can be used as a single path segment.

    Args:
        item_id: A workflow or mini-prompt identifier

    Returns:
        bool: True if the identifier contains no separators or parent references
    """
    return bool(_SAFE_ID.fullmatch(item_id or "")) and ".." not in item_id


def workflow_file_path(workflow_id: str) -> str:
    """Return the path of a workflow's manifest (workflows/<id>/workflow.yaml)."""
    return os.path.join(config.WORKFLOWS_DIR, workflow_id, "workflow.yaml")


def mini_prompt_file_path(mini_prompt_id: str) -> str:
    """Return the path of a mini-prompt's markdown file (mini_prompts/<id>.md)."""
    return os.path.join(config.MINI_PROMPTS_DIR, f"{mini_prompt_id}.md")


def slugify(title: str) -> str:
    """Convert a title into a file-safe slug of lowercase letters, digits and underscores.

    Raises:
        ValueError: If title is empty
    """
    if not title:
        raise ValueError("Title cannot be empty when generating a slug.")
    s = title.lower()
    s = re.sub(r"[^a-z0-9\s]+", " ", s)
    s = re.sub(r"\s+", "_", s.strip())
    return s
