import logging
import os
from typing import Optional

ROOT_LOGGER = "election-seats"


def get_logger(area: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or its child for one area such as "rock"."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(asctime)s] %(name)s %(levelname)s: %(message)s")
        handler.setFormatter(formatter)
        root.addHandler(handler)

        # Allow log level to be configured via environment variable
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        root.setLevel(getattr(logging, log_level, logging.INFO))
    return root.getChild(area) if area else root
