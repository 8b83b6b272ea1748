"""
Logging Configuration
Sets up the logger shared by the batch driver and the command line tool.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "quicksort_batch"


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'quicksort_batch' namespace.

    Args:
        level: Logging level, either a number (logging.DEBUG) or a name ("DEBUG").
        log_file: Optional path to save logs to a file.

    Returns:
        The configured logger.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Reconfiguring from tests or repeated CLI runs must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # stdout carries the sorted results
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
