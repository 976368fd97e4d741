"""
Logging configuration.

Importing this module configures the root logger once for the whole
application. Modules obtain their own logger with ``logging.getLogger(__name__)``.
"""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=LOG_FORMAT,
)

# httpx logs every request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)
