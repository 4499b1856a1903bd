from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

from agents_playbook.config import USAGE_GUIDE_REL_PATH
from agents_playbook.io.files import read_markdown

FALLBACK_USAGE_GUIDE = (
    "# Agents Playbook - Usage Guide\n\n"
    "Call `get_next_step` with current_step=0 and follow each step."
)


def load_usage_guide() -> str:
    """Return the agents' usage guide, or a minimal fallback if it is missing."""
    try:
        return read_markdown(USAGE_GUIDE_REL_PATH)
    except OSError:
        return FALLBACK_USAGE_GUIDE


def register_usage_resources(mcp_instance: "FastMCP") -> None:
    """Register the usage guide as an MCP resource.

    The content is loaded from docs/usage_guide_agents.md so it can be edited easily.
    """
    mcp_instance.resource(
        uri="resource://agents-playbook/usage_guide_agents.md",
        name="usage_guide_agents.md",
        title="Agents Playbook Usage Guide for Agents",
        description="How agents walk through a workflow's execution plan.",
        mime_type="text/markdown",
    )(load_usage_guide)
