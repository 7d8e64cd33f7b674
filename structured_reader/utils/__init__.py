"""
Utility functions and helpers.

Components:
    - setup_logging: Configure stdlib logging for the structured_reader loggers

Example:
    ```python
    from structured_reader.utils import setup_logging

    setup_logging(level="DEBUG")
    ```
"""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Union[int, str] = "WARNING") -> logging.Logger:
    """
    Configure logging for structured_reader.

    Args:
        level: Logging level name or number

    Returns:
        logging.Logger: The package logger
    """
    logging.basicConfig(format=LOG_FORMAT)
    logger = logging.getLogger("structured_reader")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger


__all__ = ["setup_logging"]
