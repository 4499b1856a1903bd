from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AutoPromptType(str, Enum):
    """The two system prompts that can be injected into a stage.

    Each kind owns a stage-scoped synthetic identifier of the form
    ``<value>-<stage_id>``; this is what appears in a stage's item_order.
    """

    MEMORY_BOARD = "memory-board"
    MULTI_AGENT_CHAT = "multi-agent-chat"

    @property
    def prefix(self) -> str:
        return f"{self.value}-"

    def scoped_id(self, stage_id: str) -> str:
        return f"{self.prefix}{stage_id}"

    @classmethod
    def from_item_id(cls, item_id: str) -> Optional["AutoPromptType"]:
        """Return the kind whose scoped-id prefix item_id carries, if any."""
        for kind in cls:
            if item_id.startswith(kind.prefix):
                return kind
        return None


class PlanItemType(str, Enum):
    # STAGE is part of the public contract but never emitted by the builder;
    # stage boundaries are carried by stage_index/stage_name on every item.
    STAGE = "stage"
    MINI_PROMPT = "mini-prompt"
    AUTO_PROMPT = "auto-prompt"


class MiniPrompt(BaseModel):
    """A reusable instruction block authored by a user or the system."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    description: Optional[str] = None
    content: str = ""
    is_system_mini_prompt: bool = False


class AutoPromptTemplate(BaseModel):
    """Content of one of the well-known system auto-prompts."""

    name: str
    description: Optional[str] = None
    content: str = ""


class StageMiniPrompt(BaseModel):
    order: int = 0
    mini_prompt: MiniPrompt


class Stage(BaseModel):
    """A named phase of a workflow.

    item_order is the user's drag-and-drop order across mini-prompts and
    auto-prompts. None means the stage was never customized.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    order: int = 0
    with_review: bool = False
    include_multi_agent_chat: bool = False
    mini_prompts: list[StageMiniPrompt] = Field(default_factory=list)
    item_order: Optional[list[str]] = None

    @field_validator("item_order", mode="before")
    @classmethod
    def drop_invalid_item_ids(cls, value: Any) -> Optional[list[str]]:
        """Keep string and numeric IDs; anything else in a stored order is dropped."""
        if not isinstance(value, (list, tuple)):
            return None
        return [
            str(item_id)
            for item_id in value
            if isinstance(item_id, (str, int)) and not isinstance(item_id, bool)
        ]

    @field_validator("mini_prompts")
    @classmethod
    def sort_mini_prompts(cls, value: list[StageMiniPrompt]) -> list[StageMiniPrompt]:
        return sorted(value, key=lambda smp: smp.order)


class Workflow(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    description: Optional[str] = None
    # Legacy workflow-wide switch; stages carry their own flag now.
    include_multi_agent_chat: bool = False
    stages: list[Stage] = Field(default_factory=list)

    @field_validator("stages")
    @classmethod
    def sort_stages(cls, value: list[Stage]) -> list[Stage]:
        return sorted(value, key=lambda s: s.order)


class ExecutionPlanItem(BaseModel):
    """One step of an execution plan."""

    model_config = ConfigDict(frozen=True)

    index: int
    type: PlanItemType
    stage_index: int
    stage_name: str
    name: str
    description: Optional[str] = None
    content: Optional[str] = None
    is_auto_attached: bool = False
    auto_prompt_type: Optional[AutoPromptType] = None


class ExecutionPlan(BaseModel):
    """A workflow flattened into globally indexed steps.

    Never persisted: it is recomputed from the workflow on every request.
    """

    model_config = ConfigDict(frozen=True)

    workflow_id: str
    workflow_name: str
    include_multi_agent_chat: bool = False
    total_steps: int = 0
    items: tuple[ExecutionPlanItem, ...] = ()
