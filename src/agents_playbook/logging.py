"""Centralized logging configuration for Agents Playbook.

Import this module once, as early as possible, from an entrypoint (the
server's __main__.py or the seeding CLI). It configures the root logger from
the settings in the config module. Every line carries the request's
correlation ID, or "-" outside a request.
"""

import logging
import sys
from pathlib import Path

from agents_playbook import config
from agents_playbook.logging_context import CorrelationIdFilter

logger = logging.getLogger(__name__)

LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - %(name)s:%(lineno)d - [%(corr_id)s] - %(message)s"
)

level = getattr(logging, config.LOG_LEVEL, logging.INFO)

# Log to stdout only, unless AGENTS_PLAYBOOK_ENABLE_FILE_LOG asks for a file too.
handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
if config.ENABLE_FILE_LOG:
    Path(config.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)
    handlers.append(logging.FileHandler(config.LOG_FILE_PATH))

# On the handlers, not a logger: records from every library pass through them.
for handler in handlers:
    handler.addFilter(CorrelationIdFilter())

logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

logger.info(
    "Logging configured. Level: %s, File logging enabled: %s, storage: %s | %s",
    config.LOG_LEVEL,
    config.ENABLE_FILE_LOG,
    config.WORKFLOWS_DIR,
    config.MINI_PROMPTS_DIR,
)
