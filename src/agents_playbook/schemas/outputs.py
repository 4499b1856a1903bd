"""Transport-facing output schemas for MCP tools.

These Pydantic models define the structured shapes returned by the MCP
tool functions. They sit outside of the domain models to keep transport
concerns (serialization, stability of output contracts) separate from the
plan builder's value types.
"""

from typing import Optional

from pydantic import BaseModel

from agents_playbook.domain.models import (
    AutoPromptType,
    ExecutionPlan,
    ExecutionPlanItem,
    PlanItemType,
)


class PlanStepOut(BaseModel):
    """A single execution plan step as returned by MCP tools."""

    index: int
    type: PlanItemType
    stage_index: int
    stage_name: str
    name: str
    description: Optional[str] = None
    content: Optional[str] = None
    is_auto_attached: bool = False
    auto_prompt_type: Optional[AutoPromptType] = None

    @classmethod
    def from_item(cls, item: ExecutionPlanItem) -> "PlanStepOut":
        return cls(**item.model_dump())


class ExecutionPlanOut(BaseModel):
    """Structured execution plan plus its Markdown rendering."""

    workflow_id: str
    workflow_name: str
    include_multi_agent_chat: bool
    total_steps: int
    items: list[PlanStepOut]
    report: str

    @classmethod
    def from_plan(cls, plan: ExecutionPlan, report: str) -> "ExecutionPlanOut":
        return cls(
            workflow_id=plan.workflow_id,
            workflow_name=plan.workflow_name,
            include_multi_agent_chat=plan.include_multi_agent_chat,
            total_steps=plan.total_steps,
            items=[PlanStepOut.from_item(i) for i in plan.items],
            report=report,
        )


class StepOut(BaseModel):
    """Result of get_next_step.

    step is None when the workflow or the step does not exist; report then
    explains why.
    """

    workflow_id: str
    current_step: int
    total_steps: Optional[int] = None
    step: Optional[PlanStepOut] = None
    next_step: Optional[int] = None
    report: str


class WorkflowListItem(BaseModel):
    """Compact listing shape for workflows."""

    id: str
    name: str
    stage_count: int = 0
