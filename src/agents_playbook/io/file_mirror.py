import logging
import os
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def split_front_matter(raw_text: str) -> tuple[dict[str, Any], str]:
    """Split markdown text containing YAML front matter into metadata and body.

    Args:
        raw_text: The raw markdown text that may contain YAML front matter

    Returns:
        Tuple[Dict[str, Any], str]: A tuple of (front_matter_dict, body_text).
            Text without a closed front matter block is returned whole as body.

    Raises:
        yaml.YAMLError: If the front matter block is not valid YAML
    """
    if not raw_text.startswith("---"):
        return {}, raw_text

    lines = raw_text.split("\n")
    end_index = next(
        (i for i in range(1, len(lines)) if lines[i].strip() == "---"), None
    )
    if end_index is None:
        return {}, raw_text

    front = yaml.safe_load("\n".join(lines[1:end_index])) or {}
    if not isinstance(front, dict):
        front = {}
    body = "\n".join(lines[end_index + 1 :])
    return front, body.strip("\n")


def render_with_front_matter(front: dict[str, Any], body: str) -> str:
    """Render a dictionary and body text into markdown with YAML front matter."""
    fm = yaml.safe_dump(front, sort_keys=False, allow_unicode=True).rstrip() + "\n"
    return f"---\n{fm}---\n\n{body or ''}"


def atomic_write(abs_path: str, content: str) -> None:
    """Write content to a file atomically to prevent corruption on failure."""
    directory = os.path.dirname(abs_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    tmp_path = abs_path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(content)
    os.replace(tmp_path, abs_path)


def read_item_file(abs_path: str) -> tuple[dict[str, Any], str]:
    """Read a markdown file with YAML front matter.

    Returns ({}, "") when the file does not exist.
    """
    if not os.path.exists(abs_path):
        return {}, ""
    with open(abs_path, encoding="utf-8") as f:
        raw = f.read()
    return split_front_matter(raw)


def save_item_to_file(abs_path: str, front: dict[str, Any], content: str) -> None:
    """Save metadata and body to a markdown file with YAML front matter."""
    cleaned = {k: v for k, v in front.items() if v is not None}
    cleaned.setdefault("schema_version", 1)
    atomic_write(abs_path, render_with_front_matter(cleaned, content))
    logger.info("Wrote item file: %s", abs_path)
