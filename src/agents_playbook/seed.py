"""Seed or update the two automatic system mini-prompts.

Usage:
    python -m agents_playbook.seed --memory-board handoff.md --multi-agent-chat chat.md

Safe to run multiple times: an existing system mini-prompt with the same
display name is updated in place, otherwise a new one is created.
"""

import argparse
import logging
import sys
from importlib import import_module
from pathlib import Path
from typing import Optional

from agents_playbook.domain.models import AutoPromptType, MiniPrompt
from agents_playbook.io.paths import slugify
from agents_playbook.services import workflow_repository as repo

logger = logging.getLogger(__name__)

AUTOMATIC_PROMPT_DESCRIPTIONS = {
    AutoPromptType.MEMORY_BOARD: (
        "Document phase completion, track file changes, and capture learnings. "
        "Automatically added to stages with review enabled."
    ),
    AutoPromptType.MULTI_AGENT_CHAT: (
        "Enable multi-agent coordination through internal chat for parallel work "
        "execution. Automatically added after each mini-prompt when multi-agent "
        "chat is enabled."
    ),
}


def _free_prompt_id(name: str) -> str:
    """Pick an ID for a new system prompt that does not clobber a user's prompt."""
    base = slugify(name)
    candidate = base
    suffix = 2
    while repo.load_mini_prompt(candidate) is not None:
        candidate = f"{base}_{suffix}"
        suffix += 1
    return candidate


def seed_automatic_prompt(kind: AutoPromptType, content: str) -> MiniPrompt:
    """Create or update the system mini-prompt backing an auto-prompt kind."""
    name = repo.template_name(kind)
    existing = repo.find_system_mini_prompt(name)
    existing_id = existing.id if existing else None
    prompt = MiniPrompt(
        id=existing_id or _free_prompt_id(name),
        name=name,
        description=AUTOMATIC_PROMPT_DESCRIPTIONS[kind],
        content=content.strip(),
        is_system_mini_prompt=True,
    )
    repo.save_mini_prompt(prompt)
    logger.info(
        "%s system prompt '%s' (ID: %s)",
        "Updated" if existing_id else "Created",
        name,
        prompt.id,
    )
    return prompt


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the seeding CLI."""
    import_module("agents_playbook.logging")
    parser = argparse.ArgumentParser(
        description="Seed the automatic system mini-prompts from markdown files."
    )
    parser.add_argument(
        "--memory-board",
        type=Path,
        help="Markdown file with the Handoff Memory Board prompt content.",
    )
    parser.add_argument(
        "--multi-agent-chat",
        type=Path,
        help="Markdown file with the Internal Agents Chat prompt content.",
    )
    args = parser.parse_args(argv)

    sources = {
        AutoPromptType.MEMORY_BOARD: args.memory_board,
        AutoPromptType.MULTI_AGENT_CHAT: args.multi_agent_chat,
    }
    if not any(sources.values()):
        parser.error("at least one of --memory-board or --multi-agent-chat is required")

    failed = False
    for kind, path in sources.items():
        if path is None:
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Failed to read %s: %s. Skipping %s.", path, e, kind.value)
            failed = True
            continue
        seed_automatic_prompt(kind, content)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
