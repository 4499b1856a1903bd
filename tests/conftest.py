"""Pytest configuration and shared fixtures."""

import os
import shutil
import tempfile

import pytest

from agents_playbook.domain.models import (
    AutoPromptTemplate,
    AutoPromptType,
    MiniPrompt,
    Stage,
    StageMiniPrompt,
)

_TEST_DATA_DIR = None


def pytest_configure(config):
    """Point the storage directories at a temp dir before any test module is imported."""
    global _TEST_DATA_DIR
    _TEST_DATA_DIR = tempfile.mkdtemp(prefix="pytest_agents_playbook_")
    os.environ["WORKFLOWS_DIR"] = os.path.join(_TEST_DATA_DIR, "workflows")
    os.environ["MINI_PROMPTS_DIR"] = os.path.join(_TEST_DATA_DIR, "mini_prompts")


def pytest_unconfigure(config):
    if _TEST_DATA_DIR and os.path.exists(_TEST_DATA_DIR):
        shutil.rmtree(_TEST_DATA_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolate_storage(tmp_path, monkeypatch):
    """Give every test its own empty workflows and mini-prompts directories."""
    from agents_playbook import config

    workflows_dir = tmp_path / "workflows"
    mini_prompts_dir = tmp_path / "mini_prompts"
    monkeypatch.setattr(config, "WORKFLOWS_DIR", str(workflows_dir))
    monkeypatch.setattr(config, "MINI_PROMPTS_DIR", str(mini_prompts_dir))
    yield {"workflows": workflows_dir, "mini_prompts": mini_prompts_dir}


@pytest.fixture
def chat_template():
    return AutoPromptTemplate(
        name="Internal Agents Chat",
        description="Coordinate with the other agents.",
        content="Post your status to the internal chat.",
    )


@pytest.fixture
def review_template():
    return AutoPromptTemplate(
        name="Handoff Memory Board",
        description="Record what this stage changed.",
        content="Update the memory board.",
    )


@pytest.fixture
def templates(chat_template, review_template):
    return {
        AutoPromptType.MULTI_AGENT_CHAT: chat_template,
        AutoPromptType.MEMORY_BOARD: review_template,
    }


@pytest.fixture
def no_templates():
    return {AutoPromptType.MULTI_AGENT_CHAT: None, AutoPromptType.MEMORY_BOARD: None}


@pytest.fixture
def make_stage():
    """Build a Stage whose mini-prompts are named after their IDs.

    Example:
        stage = make_stage(["a", "b"], with_review=True)
    """

    def _make(prompt_ids, stage_id="stage-1", name="Stage 1", **fields):
        mini_prompts = [
            StageMiniPrompt(
                order=position,
                mini_prompt=MiniPrompt(
                    id=prompt_id,
                    name=f"Prompt {prompt_id}",
                    description=f"Does {prompt_id}",
                    content=f"Instructions for {prompt_id}",
                ),
            )
            for position, prompt_id in enumerate(prompt_ids)
        ]
        return Stage(id=stage_id, name=name, mini_prompts=mini_prompts, **fields)

    return _make


@pytest.fixture
def seed_templates():
    """Write the system auto-prompts to the mini-prompts directory."""
    from agents_playbook.services import workflow_repository

    def _seed(memory_board=True, multi_agent_chat=True):
        if memory_board:
            workflow_repository.save_mini_prompt(
                MiniPrompt(
                    id="handoff_memory_board",
                    name="Handoff Memory Board",
                    description="Record what this stage changed.",
                    content="Update the memory board.",
                    is_system_mini_prompt=True,
                )
            )
        if multi_agent_chat:
            workflow_repository.save_mini_prompt(
                MiniPrompt(
                    id="internal_agents_chat",
                    name="Internal Agents Chat",
                    description="Coordinate with the other agents.",
                    content="Post your status to the internal chat.",
                    is_system_mini_prompt=True,
                )
            )

    return _seed
