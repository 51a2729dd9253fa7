"""
Logging configuration.
"""
import logging
import sys

from agent_auditor.config import settings

_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

# Create logger
logger = logging.getLogger("agent_auditor")
logger.setLevel(_level)

# Console handler
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(_level)

# Formatter
formatter = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
console_handler.setFormatter(formatter)

# Add handler
if not logger.handlers:
    logger.addHandler(console_handler)
