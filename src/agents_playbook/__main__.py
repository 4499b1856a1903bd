"""Entry point for running the Agents Playbook MCP server."""

import logging
from importlib import import_module

import uvicorn

# --- Configuration Bootstrap ---
# Configuration and logging are set up here exactly once, before anything
# else is imported. The order matters.
from agents_playbook import config

import_module("agents_playbook.logging")


logger = logging.getLogger(__name__)


def main() -> None:
    log_destination = config.LOG_FILE_PATH if config.ENABLE_FILE_LOG else "stdout only"
    logger.info(
        "Starting Agents Playbook MCP server on %s:%s (reload=%s). App logs to: %s",
        config.HOST,
        config.PORT,
        config.RELOAD,
        log_destination,
    )
    logger.info(
        "Workflows dir: %s, mini-prompts dir: %s",
        config.WORKFLOWS_DIR,
        config.MINI_PROMPTS_DIR,
    )

    if config.RELOAD:
        logger.info(
            "Reloading enabled. Reload dirs: %s, includes: %s, excludes: %s",
            config.RELOAD_DIRS,
            config.RELOAD_INCLUDES,
            config.RELOAD_EXCLUDES,
        )

    uvicorn.run(
        "agents_playbook.server.app:starlette_app",
        factory=True,
        # Keep the logging configured above instead of uvicorn's defaults.
        log_config=None,
        host=config.HOST,
        port=config.PORT,
        reload=config.RELOAD,
        reload_dirs=[d for d in config.RELOAD_DIRS if d],
        reload_includes=[p for p in config.RELOAD_INCLUDES if p],
        reload_excludes=[p for p in config.RELOAD_EXCLUDES if p],
        timeout_graceful_shutdown=config.TIMEOUT_GRACEFUL_SHUTDOWN,
        timeout_keep_alive=config.TIMEOUT_KEEP_ALIVE,
    )


if __name__ == "__main__":
    main()
