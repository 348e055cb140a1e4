import logging
import os
import sys
from typing import Optional


def setup_logger(name: str = "liz_spiration", level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel((level or os.getenv("LOG_LEVEL") or "INFO").strip().upper())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )

    logger.addHandler(handler)
    logger.propagate = False
    return logger
