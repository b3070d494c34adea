"""
Logging for the world, the interpreter and the planner.

Worlds log under their own name, while the interpreter, the planner and the
graph search share the ``pyshrdlite`` logger.
"""

import logging
from logging import Logger


LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"


def create_logger(name: str, level: int = logging.INFO) -> Logger:
    """
    Gets a named logger that prints to the console.

    Calling this again with the same name reuses the existing console handler.

    :param name: The name of the logger, such as a world name.
    :param level: The level of the logger.
    :return: A logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.hasHandlers():
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    # Records also reach the root logger, where pytest's caplog collects them.
    logger.propagate = True
    return logger


PLANNING_LOGGER = create_logger("pyshrdlite")


def get_global_logger() -> Logger:
    """
    Returns the logger shared by interpretation, planning and search.

    :return: The ``pyshrdlite`` logger.
    """
    return PLANNING_LOGGER
