from __future__ import annotations

import logging
import os


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring the root handler on first use.

    The level comes from MOLCORE_LOG_LEVEL (default INFO).
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        level_name = os.environ.get("MOLCORE_LOG_LEVEL", "INFO").upper()
        logging.basicConfig(
            level=getattr(logging, level_name, logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        )
    return logger
