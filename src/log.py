"""Log utilities."""

import logging
import os

from rich.logging import RichHandler

# environment variable that can be used to override default log level
LOG_LEVEL_ENV_VARIABLE = "WORDGARDEN_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """Retrieve logger with the provided name.

    The level is DEBUG unless overridden by WORDGARDEN_LOG_LEVEL environment
    variable.
    """
    logger = logging.getLogger(name)
    logger.setLevel(os.environ.get(LOG_LEVEL_ENV_VARIABLE, "DEBUG").upper())
    logger.handlers = [RichHandler()]
    logger.propagate = False
    return logger
