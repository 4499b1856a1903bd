"""Unit tests for execution plan assembly and lookup."""

import pytest
import yaml

from agents_playbook.domain.models import (
    AutoPromptType,
    MiniPrompt,
    PlanItemType,
    Workflow,
)
from agents_playbook.services import execution_plan_service, workflow_repository
from agents_playbook.services.execution_plan_service import (
    assemble_execution_plan,
    build_execution_plan,
    get_step,
)


@pytest.fixture
def workflow(make_stage):
    return Workflow(
        id="wf-1",
        name="Feature Delivery",
        stages=[
            make_stage(
                ["a", "b"],
                stage_id="s1",
                name="Analysis",
                include_multi_agent_chat=True,
                with_review=True,
            ),
            make_stage(["c"], stage_id="s2", name="Implementation", order=1),
        ],
    )


@pytest.fixture
def stub_repository(monkeypatch, workflow, templates):
    """Serve the workflow fixture from the repository without touching disk."""

    def _load(workflow_id):
        if workflow_id != workflow.id:
            raise FileNotFoundError(workflow_id)
        return workflow

    monkeypatch.setattr(execution_plan_service.repo, "load", _load)
    monkeypatch.setattr(execution_plan_service.repo, "load_auto_prompts", lambda: templates)


class TestAssembleExecutionPlan:
    def test_indices_are_continuous_across_stages(self, workflow, templates):
        plan = assemble_execution_plan(workflow, templates)

        assert plan.total_steps == 6
        assert [item.index for item in plan.items] == list(range(6))
        assert [item.stage_index for item in plan.items] == [0, 0, 0, 0, 0, 1]
        assert plan.items[-1].stage_name == "Implementation"

    def test_item_sequence(self, workflow, templates):
        plan = assemble_execution_plan(workflow, templates)

        assert [item.name for item in plan.items] == [
            "Prompt a",
            "Internal Agents Chat",
            "Prompt b",
            "Internal Agents Chat",
            "Handoff Memory Board",
            "Prompt c",
        ]

    def test_auto_prompt_item_fields(self, workflow, templates, review_template):
        review = assemble_execution_plan(workflow, templates).items[4]

        assert review.type == PlanItemType.AUTO_PROMPT
        assert review.is_auto_attached is True
        assert review.auto_prompt_type == AutoPromptType.MEMORY_BOARD
        assert review.description == review_template.description
        assert review.content == review_template.content

    def test_mini_prompt_item_fields(self, workflow, templates):
        first = assemble_execution_plan(workflow, templates).items[0]

        assert first.type == PlanItemType.MINI_PROMPT
        assert first.is_auto_attached is False
        assert first.auto_prompt_type is None
        assert first.content == "Instructions for a"

    def test_builder_never_emits_stage_items(self, workflow, templates):
        plan = assemble_execution_plan(workflow, templates)
        assert all(item.type != PlanItemType.STAGE for item in plan.items)

    def test_is_deterministic(self, workflow, templates):
        first = assemble_execution_plan(workflow, templates)
        second = assemble_execution_plan(workflow, templates)

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_multi_agent_chat_rolls_up_from_stages(self, workflow, templates):
        assert assemble_execution_plan(workflow, templates).include_multi_agent_chat

    def test_multi_agent_chat_from_workflow_flag(self, make_stage, templates):
        workflow = Workflow(
            id="wf", name="WF", include_multi_agent_chat=True, stages=[make_stage(["a"])]
        )
        plan = assemble_execution_plan(workflow, templates)

        assert plan.include_multi_agent_chat is True
        # The legacy workflow flag does not inject chat steps on its own.
        assert plan.total_steps == 1

    def test_multi_agent_chat_disabled(self, make_stage, templates):
        workflow = Workflow(id="wf", name="WF", stages=[make_stage(["a"])])
        assert assemble_execution_plan(workflow, templates).include_multi_agent_chat is False

    def test_stages_follow_their_order_field(self, make_stage, templates):
        workflow = Workflow(
            id="wf",
            name="WF",
            stages=[
                make_stage(["late"], stage_id="s2", name="Second", order=2),
                make_stage(["early"], stage_id="s1", name="First", order=1),
            ],
        )
        plan = assemble_execution_plan(workflow, templates)
        assert [item.stage_name for item in plan.items] == ["First", "Second"]

    def test_empty_workflow(self, templates):
        plan = assemble_execution_plan(Workflow(id="wf", name="WF"), templates)
        assert plan.total_steps == 0
        assert plan.items == ()

    def test_no_chat_items_without_template(self, workflow, no_templates):
        plan = assemble_execution_plan(workflow, no_templates)

        assert plan.total_steps == 3
        assert not any(item.is_auto_attached for item in plan.items)


class TestBuildExecutionPlan:
    def test_builds_plan_from_repository(self, stub_repository):
        plan = build_execution_plan("wf-1")

        assert plan is not None
        assert plan.workflow_id == "wf-1"
        assert plan.workflow_name == "Feature Delivery"
        assert plan.total_steps == 6

    def test_missing_workflow_returns_none(self, stub_repository):
        assert build_execution_plan("nonexistent") is None

    def test_persistence_errors_propagate(self, monkeypatch):
        def _broken(workflow_id):
            raise PermissionError("no access")

        monkeypatch.setattr(execution_plan_service.repo, "load", _broken)
        with pytest.raises(PermissionError):
            build_execution_plan("wf-1")

    def test_malformed_item_order_still_builds(self, isolate_storage, seed_templates):
        seed_templates()
        for prompt_id in ("a", "b"):
            workflow_repository.save_mini_prompt(
                MiniPrompt(id=prompt_id, name=f"Prompt {prompt_id}")
            )
        manifest = {
            "name": "WF",
            "stages": [
                {
                    "id": "s1",
                    "name": "S",
                    "with_review": True,
                    "mini_prompts": ["a", "b"],
                    "item_order": ["b", None, "memory-board-old", "a"],
                }
            ],
        }
        path = isolate_storage["workflows"] / "wf" / "workflow.yaml"
        path.parent.mkdir(parents=True)
        path.write_text(yaml.safe_dump(manifest), encoding="utf-8")

        plan = build_execution_plan("wf")

        assert [item.name for item in plan.items] == [
            "Prompt b",
            "Handoff Memory Board",
            "Prompt a",
        ]

    def test_reloads_on_every_call(self, monkeypatch, workflow, templates):
        calls = []

        def _load(workflow_id):
            calls.append(workflow_id)
            return workflow

        monkeypatch.setattr(execution_plan_service.repo, "load", _load)
        monkeypatch.setattr(execution_plan_service.repo, "load_auto_prompts", lambda: templates)

        build_execution_plan("wf-1")
        build_execution_plan("wf-1")
        assert calls == ["wf-1", "wf-1"]


class TestGetStep:
    def test_returns_item_at_index(self, stub_repository):
        step = get_step("wf-1", 2)

        assert step is not None
        assert step.index == 2
        assert step.name == "Prompt b"

    def test_out_of_range_returns_none(self, stub_repository):
        assert get_step("wf-1", 9999) is None

    def test_negative_index_returns_none(self, stub_repository):
        assert get_step("wf-1", -1) is None

    def test_missing_workflow_returns_none(self, stub_repository):
        assert get_step("nonexistent", 0) is None


class TestStepAt:
    def test_bounds(self, workflow, templates):
        plan = assemble_execution_plan(workflow, templates)

        assert execution_plan_service.step_at(plan, 0).name == "Prompt a"
        assert execution_plan_service.step_at(plan, 5).name == "Prompt c"
        assert execution_plan_service.step_at(plan, 6) is None
        assert execution_plan_service.step_at(plan, -1) is None
