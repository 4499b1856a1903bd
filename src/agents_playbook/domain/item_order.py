"""Resolution of the ordered item list of a single stage.

A stage's items are its mini-prompts plus up to two auto-prompts. When the
user customized the order (drag and drop), the stored item_order wins and
anything added since is appended at the end. Otherwise the default order
interleaves a coordination prompt after every mini-prompt and closes the
stage with a review prompt.

Stored auto-prompt ids are scoped to the stage id they were saved under, and
stage ids can change between saves. Every stored id carrying an auto-prompt
prefix is therefore folded onto the current stage's scoped id before it is
compared with anything.
"""

from collections.abc import Mapping
from typing import Optional, Union

from agents_playbook.domain.models import (
    AutoPromptTemplate,
    AutoPromptType,
    MiniPrompt,
    Stage,
)

AutoPromptTemplates = Mapping[AutoPromptType, Optional[AutoPromptTemplate]]

# (None, MiniPrompt) for a user prompt, (kind, template) for an auto-prompt.
StageItem = tuple[Optional[AutoPromptType], Union[MiniPrompt, AutoPromptTemplate]]


def normalize_item_id(item_id: str, stage_id: str) -> str:
    """Map an auto-prompt id saved under any stage id onto the current stage.

    Mini-prompt ids are returned unchanged.
    """
    kind = AutoPromptType.from_item_id(item_id)
    if kind is None:
        return item_id
    return kind.scoped_id(stage_id)


def normalized_item_order(stage: Stage) -> list[str]:
    """Return the stage's stored order with auto-prompt ids normalized.

    Duplicates produced by normalization collapse onto their first position.
    """
    seen: set[str] = set()
    result: list[str] = []
    for item_id in stage.item_order or []:
        normalized = normalize_item_id(item_id, stage.id)
        if normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def _flag_enabled(stage: Stage, kind: AutoPromptType) -> bool:
    if kind is AutoPromptType.MULTI_AGENT_CHAT:
        return stage.include_multi_agent_chat
    return stage.with_review


def auto_prompt_included(
    stage: Stage, kind: AutoPromptType, templates: AutoPromptTemplates
) -> bool:
    """Whether the stage carries this auto-prompt kind at all.

    An auto-prompt already placed in the stored order stays in the plan even
    after its flag was switched off.
    """
    if templates.get(kind) is None:
        return False
    return _flag_enabled(stage, kind) or kind.scoped_id(
        stage.id
    ) in normalized_item_order(stage)


def build_candidates(
    stage: Stage, templates: AutoPromptTemplates
) -> dict[str, StageItem]:
    """Collect every item the stage can show, keyed by item id, in natural order."""
    candidates: dict[str, StageItem] = {}
    for stage_mini_prompt in stage.mini_prompts:
        prompt = stage_mini_prompt.mini_prompt
        candidates[prompt.id] = (None, prompt)

    for kind in (AutoPromptType.MULTI_AGENT_CHAT, AutoPromptType.MEMORY_BOARD):
        template = templates.get(kind)
        if template is not None and auto_prompt_included(stage, kind, templates):
            candidates[kind.scoped_id(stage.id)] = (kind, template)
    return candidates


def _custom_order(stage: Stage, templates: AutoPromptTemplates) -> list[StageItem]:
    candidates = build_candidates(stage, templates)

    ordered_ids = [i for i in normalized_item_order(stage) if i in candidates]
    listed = set(ordered_ids)
    # Items added after the order was saved land at the end.
    ordered_ids.extend(i for i in candidates if i not in listed)

    return [candidates[i] for i in ordered_ids]


def _default_order(stage: Stage, templates: AutoPromptTemplates) -> list[StageItem]:
    chat = templates.get(AutoPromptType.MULTI_AGENT_CHAT)
    review = templates.get(AutoPromptType.MEMORY_BOARD)

    items: list[StageItem] = []
    for stage_mini_prompt in stage.mini_prompts:
        items.append((None, stage_mini_prompt.mini_prompt))
        if stage.include_multi_agent_chat and chat is not None:
            items.append((AutoPromptType.MULTI_AGENT_CHAT, chat))

    if stage.with_review and review is not None:
        items.append((AutoPromptType.MEMORY_BOARD, review))
    return items


def resolve_stage_items(
    stage: Stage, templates: AutoPromptTemplates
) -> list[StageItem]:
    """Return the stage's items in execution order."""
    if stage.item_order:
        return _custom_order(stage, templates)
    return _default_order(stage, templates)
