"""Builds execution plans: workflows flattened into globally indexed steps.

Example execution order for a stage with two mini-prompts, multi-agent chat
and review enabled, and no custom order:

- Step 0: Mini-prompt 1
- Step 1: Internal Agents Chat
- Step 2: Mini-prompt 2
- Step 3: Internal Agents Chat
- Step 4: Handoff Memory Board

Plans are never cached; every call re-reads the workflow and templates.
"""

import logging
from typing import Optional

from agents_playbook.domain.item_order import AutoPromptTemplates, resolve_stage_items
from agents_playbook.domain.models import (
    ExecutionPlan,
    ExecutionPlanItem,
    PlanItemType,
    Workflow,
)
from agents_playbook.logging_context import get_correlation_id
from agents_playbook.services import workflow_repository as repo
from agents_playbook.telemetry import incr, timer

logger = logging.getLogger(__name__)


def assemble_execution_plan(
    workflow: Workflow, templates: AutoPromptTemplates
) -> ExecutionPlan:
    """Flatten a loaded workflow into an execution plan. Pure: no I/O."""
    items: list[ExecutionPlanItem] = []

    for stage_index, stage in enumerate(workflow.stages):
        for kind, source in resolve_stage_items(stage, templates):
            items.append(
                ExecutionPlanItem(
                    index=len(items),
                    type=PlanItemType.MINI_PROMPT
                    if kind is None
                    else PlanItemType.AUTO_PROMPT,
                    stage_index=stage_index,
                    stage_name=stage.name,
                    name=source.name,
                    description=source.description or None,
                    content=source.content,
                    is_auto_attached=kind is not None,
                    auto_prompt_type=kind,
                )
            )

    include_chat = workflow.include_multi_agent_chat or any(
        s.include_multi_agent_chat for s in workflow.stages
    )
    return ExecutionPlan(
        workflow_id=workflow.id,
        workflow_name=workflow.name,
        include_multi_agent_chat=include_chat,
        total_steps=len(items),
        items=tuple(items),
    )


def build_execution_plan(workflow_id: str) -> Optional[ExecutionPlan]:
    """Build the complete execution plan for a workflow.

    Returns None if the workflow does not exist. Any other persistence error
    propagates to the caller.
    """
    with timer("execution_plan.build", workflow_id=workflow_id):
        try:
            workflow = repo.load(workflow_id)
        except FileNotFoundError:
            logger.warning("Workflow '%s' not found.", workflow_id)
            incr("execution_plan.not_found")
            return None

        plan = assemble_execution_plan(workflow, repo.load_auto_prompts())

    logger.info(
        {
            "event": "build_execution_plan",
            "workflow_id": workflow_id,
            "total_steps": plan.total_steps,
            "corr_id": get_correlation_id(),
        }
    )
    return plan


def step_at(plan: ExecutionPlan, step_index: int) -> Optional[ExecutionPlanItem]:
    """Return the step at a 0-based index, or None if out of range.

    Negative indices are out of range; they never count from the end.
    """
    if not 0 <= step_index < plan.total_steps:
        return None
    return plan.items[step_index]


def get_step(workflow_id: str, step_index: int) -> Optional[ExecutionPlanItem]:
    """Return one step of a workflow's plan, or None if missing or out of range."""
    plan = build_execution_plan(workflow_id)
    if plan is None:
        return None
    return step_at(plan, step_index)
