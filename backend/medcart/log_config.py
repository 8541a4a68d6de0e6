# backend/medcart/log_config.py
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | [%(name)s] %(message)s"


def setup_logging(level="INFO"):
    """Attach a single stdout handler to the ``medcart`` logger tree."""
    logger = logging.getLogger("medcart")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    # Clear existing handlers so reloads don't duplicate output
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
