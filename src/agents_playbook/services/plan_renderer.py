"""Markdown rendering of execution plans for MCP responses.

Pure formatting only: no storage access, no state.
"""

from typing import Optional

from agents_playbook.domain.models import (
    AutoPromptType,
    ExecutionPlan,
    ExecutionPlanItem,
    PlanItemType,
)

_AUTO_PROMPT_MARKERS = {
    AutoPromptType.MEMORY_BOARD: ("📋", "[REVIEW]"),
    AutoPromptType.MULTI_AGENT_CHAT: ("🤖", "[AUTO]"),
}


def _marker(item: ExecutionPlanItem) -> tuple[str, str]:
    if item.auto_prompt_type is AutoPromptType.MEMORY_BOARD:
        return _AUTO_PROMPT_MARKERS[AutoPromptType.MEMORY_BOARD]
    return _AUTO_PROMPT_MARKERS[AutoPromptType.MULTI_AGENT_CHAT]


def format_execution_plan(plan: ExecutionPlan) -> str:
    """Render the whole plan, with a heading each time the stage changes."""
    report = [
        f"# Execution Plan: {plan.workflow_name}",
        "",
        f"**Total Steps:** {plan.total_steps}",
        f"**Multi-Agent Chat:** {'Enabled' if plan.include_multi_agent_chat else 'Disabled'}",
        "",
        "---",
        "",
    ]

    current_stage: Optional[int] = None
    for item in plan.items:
        if item.stage_index != current_stage:
            current_stage = item.stage_index
            report.append(f"## Stage {current_stage + 1}: {item.stage_name}")
            report.append("")

        if item.type == PlanItemType.AUTO_PROMPT:
            icon, badge = _marker(item)
            report.append(f"### {item.index + 1}. {icon} {item.name} {badge}")
            report.append("")
            report.append(
                f"> **Auto-attached prompt** - {item.description or 'No description'}"
            )
            report.append("")
        else:
            report.append(f"### {item.index + 1}. {item.name}")
            report.append("")
            if item.description:
                report.append(item.description)
                report.append("")

    return "\n".join(report)


def format_step(
    plan: ExecutionPlan,
    step: ExecutionPlanItem,
    available_context: Optional[list[str]] = None,
) -> str:
    """Render a single step for an agent, including how to continue."""
    report = [f"# Step {step.index + 1}/{plan.total_steps}", ""]
    report.append(f"**Stage:** {step.stage_name}")

    if step.type == PlanItemType.AUTO_PROMPT:
        icon, badge = _marker(step)
        report.append(f"**Type:** Auto-attached prompt {icon} {badge}")
    else:
        report.append("**Type:** Mini-prompt")
    report.append("")

    report.append(f"## {step.name}")
    report.append("")
    if step.description:
        report.append(step.description)
        report.append("")

    if step.content:
        report.extend(["---", "", step.content, ""])
        if step.type == PlanItemType.MINI_PROMPT:
            report.extend(
                [
                    "---",
                    "",
                    "⚠️ **Important:** Strictly follow all the steps outlined above.",
                    "",
                ]
            )

    if available_context:
        report.extend(
            ["---", "", f"**Available Context:** {', '.join(available_context)}", ""]
        )

    next_index = step.index + 1
    report.extend(["---", ""])
    if next_index < plan.total_steps:
        report.append(
            f"➡️ **Next Step:** After completing this step, automatically proceed to "
            f"step {next_index + 1}/{plan.total_steps} by calling `get_next_step` "
            f'with `workflow_id="{plan.workflow_id}"` and `current_step={next_index}`.'
        )
    else:
        report.append(
            "✅ **Workflow Complete:** This is the final step. After completing this "
            "step, the workflow execution is finished."
        )

    return "\n".join(report)
