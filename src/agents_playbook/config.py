import os

# --- Helper for parsing boolean env vars ---


def _env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean environment variable.

    Accepts common boolean string representations: '1', 'true', 'yes', 'on'
    (case-insensitive).

    Args:
        name: Environment variable name
        default: Default value if variable is not set

    Returns:
        bool: The parsed boolean value
    """
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float = 1.0) -> float:
    """Parse a float environment variable, falling back to default on bad input."""
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


# --- Core Paths ---
# Determine the workspace root, which serves as the default base for other paths.
WORKSPACE_ROOT = os.getcwd()

# Workflows are stored under workflows/<workflow_id>/workflow.yaml
WORKFLOWS_DIR = os.getenv("WORKFLOWS_DIR", os.path.join(WORKSPACE_ROOT, "workflows"))
# Mini-prompts (including the system auto-prompts) are stored as mini_prompts/<id>.md
MINI_PROMPTS_DIR = os.getenv(
    "MINI_PROMPTS_DIR", os.path.join(WORKSPACE_ROOT, "mini_prompts")
)

# --- Auto-prompt Templates ---
# Display names of the two system mini-prompts injected into execution plans.
MEMORY_BOARD_PROMPT_NAME = os.getenv("MEMORY_BOARD_PROMPT_NAME", "Handoff Memory Board")
MULTI_AGENT_CHAT_PROMPT_NAME = os.getenv(
    "MULTI_AGENT_CHAT_PROMPT_NAME", "Internal Agents Chat"
)

# --- Logging Configuration ---
LOG_DIR = os.getenv("LOG_DIR", os.path.join(WORKSPACE_ROOT, "logs"))
LOG_FILE_PATH = os.path.join(LOG_DIR, "agents_playbook.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_FILE_LOG = _env_bool("AGENTS_PLAYBOOK_ENABLE_FILE_LOG")

# --- Uvicorn Configuration ---
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "3000"))
RELOAD = _env_bool("AGENTS_PLAYBOOK_RELOAD")
RELOAD_DIRS = os.getenv("RELOAD_DIRS", "src").split(",")
RELOAD_INCLUDES = os.getenv("RELOAD_INCLUDE", "*.py").split(",")
RELOAD_EXCLUDES = os.getenv("RELOAD_EXCLUDE", "logs/*").split(",")
TIMEOUT_GRACEFUL_SHUTDOWN = int(os.getenv("TIMEOUT_GRACEFUL_SHUTDOWN", "3"))
TIMEOUT_KEEP_ALIVE = int(os.getenv("TIMEOUT_KEEP_ALIVE", "5"))

# --- Docs / Agent Guides ---
USAGE_GUIDE_REL_PATH = os.getenv(
    "USAGE_GUIDE_REL_PATH", os.path.join("docs", "usage_guide_agents.md")
)

# --- Telemetry ---
# Opt-in counters/timers for plan building
TELEMETRY_ENABLED = _env_bool("AGENTS_PLAYBOOK_TELEMETRY_ENABLED")
TELEMETRY_SAMPLE_RATE = _env_float("AGENTS_PLAYBOOK_TELEMETRY_SAMPLE_RATE", 1.0)
