# tenthouse/core/logging.py
import logging
import sys

from tenthouse.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure the root logger once for the process.
    Level comes from settings.LOG_LEVEL unless given explicitly.
    """
    global _configured
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        # SQL echo is noisy; only show it when explicitly debugging
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        _configured = True

    return logging.getLogger("tenthouse")
