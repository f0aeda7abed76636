"""Logging configuration helpers."""

import logging
from typing import Union


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Configure package logging with a single stream handler.

    Calling it again only updates the level.
    """
    logger = logging.getLogger("dish_facts")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
