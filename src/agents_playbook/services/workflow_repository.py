import logging
import os
from typing import Any, Optional

import yaml

from agents_playbook import config
from agents_playbook.domain.models import (
    AutoPromptTemplate,
    AutoPromptType,
    MiniPrompt,
    Stage,
    Workflow,
)
from agents_playbook.io.file_mirror import read_item_file, save_item_to_file
from agents_playbook.io.paths import (
    is_safe_id,
    mini_prompt_file_path,
    workflow_file_path,
)

logger = logging.getLogger(__name__)


def template_name(kind: AutoPromptType) -> str:
    """Display name under which the system mini-prompt for this kind is seeded."""
    if kind is AutoPromptType.MEMORY_BOARD:
        return config.MEMORY_BOARD_PROMPT_NAME
    return config.MULTI_AGENT_CHAT_PROMPT_NAME


def load(workflow_id: str) -> Workflow:
    """Load a workflow aggregate: stages with their resolved mini-prompts.

    Raises:
        FileNotFoundError: If no workflow with this ID exists
    """
    if not is_safe_id(workflow_id):
        raise FileNotFoundError(f"Workflow file not found for ID '{workflow_id}'")
    path = workflow_file_path(workflow_id)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Workflow file not found for ID '{workflow_id}'")

    with open(path, encoding="utf-8") as f:
        manifest = yaml.safe_load(f) or {}

    manifest.setdefault("id", workflow_id)
    manifest["stages"] = [_load_stage(s) for s in manifest.get("stages") or []]
    return Workflow.model_validate(manifest)


def _load_stage(raw: dict[str, Any]) -> dict[str, Any]:
    """Resolve a stage's mini-prompt references into full mini-prompts."""
    stage = dict(raw)
    resolved = []
    for position, ref in enumerate(stage.get("mini_prompts") or []):
        # References are either bare IDs or {mini_prompt_id, order} mappings
        if not isinstance(ref, dict):
            ref = {"mini_prompt_id": ref}
        mini_prompt_id = _ref_id(ref.get("mini_prompt_id"))
        prompt = load_mini_prompt(mini_prompt_id) if mini_prompt_id else None
        if prompt is None:
            logger.warning(
                "Skipping missing mini-prompt '%s' in stage '%s'.",
                mini_prompt_id,
                stage.get("id"),
            )
            continue
        resolved.append({"order": ref.get("order", position), "mini_prompt": prompt})
    stage["mini_prompts"] = resolved
    return stage


def _ref_id(value: Any) -> Optional[str]:
    # Unquoted numeric IDs in hand-written manifests load as ints
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    return str(value)


def load_mini_prompt(mini_prompt_id: str) -> Optional[MiniPrompt]:
    """Load a single mini-prompt, or None if it does not exist."""
    if not is_safe_id(mini_prompt_id):
        return None
    front, body = read_item_file(mini_prompt_file_path(mini_prompt_id))
    if not front:
        return None
    front.setdefault("id", mini_prompt_id)
    front["content"] = body
    return MiniPrompt.model_validate(front)


def find_system_mini_prompt(name: str) -> Optional[MiniPrompt]:
    """Find a system mini-prompt by display name.

    Files are scanned in name order so the first match is stable.
    """
    directory = config.MINI_PROMPTS_DIR
    if not os.path.isdir(directory):
        return None

    for file_name in sorted(os.listdir(directory)):
        if not file_name.endswith(".md"):
            continue
        front, body = read_item_file(os.path.join(directory, file_name))
        if front.get("is_system_mini_prompt") and front.get("name") == name:
            front.setdefault("id", file_name[: -len(".md")])
            front["content"] = body
            return MiniPrompt.model_validate(front)
    return None


def load_auto_prompt(kind: AutoPromptType) -> Optional[AutoPromptTemplate]:
    """Load the template for an auto-prompt kind, or None if not seeded."""
    prompt = find_system_mini_prompt(template_name(kind))
    if prompt is None:
        logger.debug("No system mini-prompt seeded for %s.", kind.value)
        return None
    return AutoPromptTemplate(
        name=prompt.name, description=prompt.description, content=prompt.content
    )


def load_auto_prompts() -> dict[AutoPromptType, Optional[AutoPromptTemplate]]:
    """Load both auto-prompt templates, keyed by kind."""
    return {kind: load_auto_prompt(kind) for kind in AutoPromptType}


def list_workflows() -> list[dict[str, Any]]:
    """List workflow summaries (id, name, stage_count), sorted by id."""
    directory = config.WORKFLOWS_DIR
    if not os.path.isdir(directory):
        return []

    items = []
    for workflow_id in sorted(os.listdir(directory)):
        path = workflow_file_path(workflow_id)
        if not os.path.isfile(path):
            continue
        with open(path, encoding="utf-8") as f:
            manifest = yaml.safe_load(f) or {}
        items.append(
            {
                "id": manifest.get("id", workflow_id),
                "name": manifest.get("name", workflow_id),
                "stage_count": len(manifest.get("stages") or []),
            }
        )
    return items


def save_mini_prompt(prompt: MiniPrompt) -> None:
    """Persist a mini-prompt to mini_prompts/<id>.md (content as the body)."""
    if not is_safe_id(prompt.id):
        raise ValueError(f"Invalid mini-prompt ID '{prompt.id}'.")
    front = prompt.model_dump(mode="json", exclude={"content"}, exclude_none=True)
    save_item_to_file(mini_prompt_file_path(prompt.id), front, prompt.content)


def _stage_manifest(stage: Stage) -> dict[str, Any]:
    manifest = stage.model_dump(mode="json", exclude={"mini_prompts"}, exclude_none=True)
    manifest["mini_prompts"] = [
        {"mini_prompt_id": smp.mini_prompt.id, "order": smp.order}
        for smp in stage.mini_prompts
    ]
    return manifest


def save(workflow: Workflow) -> None:
    """Persist a workflow manifest and each mini-prompt it references."""
    if not is_safe_id(workflow.id):
        raise ValueError(f"Invalid workflow ID '{workflow.id}'.")

    for stage in workflow.stages:
        for smp in stage.mini_prompts:
            save_mini_prompt(smp.mini_prompt)

    manifest = workflow.model_dump(mode="json", exclude={"stages"}, exclude_none=True)
    manifest["stages"] = [_stage_manifest(s) for s in workflow.stages]

    path = workflow_file_path(workflow.id)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(manifest, f, default_flow_style=False, sort_keys=False)
    logger.info("Saved workflow '%s' to %s", workflow.id, path)
