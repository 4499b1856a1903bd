"""Agents Playbook - execution plans for multi-stage AI agent workflows.

This package turns stored workflows (stages of reusable mini-prompts) into
flat, strictly ordered execution plans and serves them to AI agents through
an MCP (Model Context Protocol) server.

Key components:
- services.execution_plan_service: builds execution plans
- services.plan_renderer: Markdown rendering of plans and single steps
- services.workflow_repository: file-backed workflows and mini-prompts
- server.app: MCP server for AI integration
"""

__version__ = "0.1.0"
