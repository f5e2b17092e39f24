from __future__ import annotations

import logging

from .config import get_log_level


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Set up root logging once; later calls only adjust the level."""
    level_name = (level or get_log_level()).upper()
    numeric = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
