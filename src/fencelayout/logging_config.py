"""
Logging Configuration
=====================
Sets up the `fencelayout` logger used by the layout engine, the loaders and
the renderers.

The CLI calls `setup_logging` once with the values of `--log-level` and
`--log-file`: records go to stdout and, when a file is given, also to that
file (overwritten per run). Library callers that never call it get no
output beyond what their own root configuration shows.
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the 'fencelayout' logger; calling it again replaces the handlers.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("fencelayout")
    logger.setLevel(level)

    # Re-running the CLI in one interpreter (tests) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
