import logging
from typing import TYPE_CHECKING, Optional, Union

from agents_playbook.schemas.outputs import (
    ExecutionPlanOut,
    PlanStepOut,
    StepOut,
    WorkflowListItem,
)
from agents_playbook.services import execution_plan_service, workflow_repository
from agents_playbook.services.plan_renderer import format_execution_plan, format_step
from agents_playbook.tools.util import coerce_int

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

logger = logging.getLogger(__name__)


def register_workflow_tools(mcp_instance: "FastMCP") -> None:
    """Register workflow execution tools with the MCP instance."""
    mcp_instance.tool()(list_workflows)
    mcp_instance.tool()(get_execution_plan)
    mcp_instance.tool()(get_next_step)


def list_workflows() -> list[WorkflowListItem]:
    """List available workflows with their stage counts."""
    return [WorkflowListItem(**d) for d in workflow_repository.list_workflows()]


def get_execution_plan(workflow_id: str) -> ExecutionPlanOut:
    """Get the full execution plan of a workflow, auto-prompts included.

    Args:
        workflow_id: ID of the workflow

    Returns:
        ExecutionPlanOut: Every step in execution order plus a Markdown overview
    """
    plan = execution_plan_service.build_execution_plan(workflow_id)
    if plan is None:
        raise ValueError(f"Workflow '{workflow_id}' not found.")
    return ExecutionPlanOut.from_plan(plan, format_execution_plan(plan))


def get_next_step(
    workflow_id: str,
    current_step: Union[int, float, str],
    available_context: Optional[list[str]] = None,
) -> StepOut:
    """Get one step of a workflow to execute.

    Start with current_step=0 and follow the returned instructions to move on
    to the next step.

    Args:
        workflow_id: ID of the workflow
        current_step: Step number to fetch (0-based index)
        available_context: Optional context the agent already has

    Returns:
        StepOut: The step and its Markdown instructions
    """
    step_index = coerce_int(current_step, "current_step")
    logger.debug(f"get_next_step called with {workflow_id!r}, step {step_index}")

    plan = execution_plan_service.build_execution_plan(workflow_id)
    if plan is None:
        return StepOut(
            workflow_id=workflow_id,
            current_step=step_index,
            report=f'Workflow "{workflow_id}" not found.',
        )

    step = execution_plan_service.step_at(plan, step_index)
    if step is None:
        if plan.total_steps:
            available = f"{plan.total_steps} steps (0-{plan.total_steps - 1})"
        else:
            available = "no steps"
        return StepOut(
            workflow_id=workflow_id,
            current_step=step_index,
            total_steps=plan.total_steps,
            report=f"Step {step_index} not found. This workflow has {available}.",
        )

    next_index = step_index + 1
    return StepOut(
        workflow_id=workflow_id,
        current_step=step_index,
        total_steps=plan.total_steps,
        step=PlanStepOut.from_item(step),
        next_step=next_index if next_index < plan.total_steps else None,
        report=format_step(plan, step, available_context),
    )
