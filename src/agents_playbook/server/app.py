"""MCP server for Agents Playbook (Streamable HTTP).

Exposes the workflow execution tools over a single MCP endpoint using
Streamable HTTP.
"""

import logging
import uuid
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

from agents_playbook.logging_context import correlation_scope
from agents_playbook.resources.usage_resources import register_usage_resources
from agents_playbook.tools.workflow_tools import register_workflow_tools

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "Agents Playbook serves multi-stage workflows as execution plans. Call "
    "`get_execution_plan` for an overview, then `get_next_step` with "
    "current_step=0 and follow each step's instructions. See "
    "resource://agents-playbook/usage_guide_agents.md for details."
)


class CorrelationIdMiddleware(BaseHTTPMiddleware):  # type: ignore[misc]
    async def dispatch(
        self,
        request: Request,
        call_next: "Callable[[Request], Awaitable[Response]]",
    ) -> Response:
        corr_id = request.headers.get("x-correlation-id") or str(uuid.uuid4())
        with correlation_scope(corr_id):
            response = await call_next(request)
        # reflect header for downstream debugging
        response.headers["x-correlation-id"] = corr_id
        return response


def create_mcp() -> FastMCP:
    """Create the FastMCP instance with all tools and resources registered."""
    mcp = FastMCP(name="Agents Playbook", instructions=INSTRUCTIONS)
    register_workflow_tools(mcp)
    register_usage_resources(mcp)
    return mcp


def starlette_app() -> Starlette:
    """Create a Starlette application for the MCP server."""
    logger.info("Initializing FastMCP.")

    app = create_mcp().streamable_http_app()
    app.add_middleware(CorrelationIdMiddleware)
    return app
