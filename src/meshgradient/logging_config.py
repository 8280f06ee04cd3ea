"""
Logging Configuration
Sets up the package logger for the command line and for embedding callers.
"""
import logging
import sys
from typing import Optional, TextIO, Union


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures the logger for the 'meshgradient' namespace.

    Args:
        level: Logging level, numeric (logging.DEBUG) or by name ("debug").
        log_file: Optional path to save logs to a file.
        stream: Console stream for log records, stdout when omitted.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown logging level: {level!r}")
        level = numeric

    logger = logging.getLogger("meshgradient")
    logger.setLevel(level)

    # Repeated calls replace the handlers instead of stacking them
    if logger.hasHandlers():
        logger.handlers.clear()

    # Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
