"""Logging setup for applications embedding the engine.

Library modules only create ``logging.getLogger(__name__)`` loggers; the host
application calls ``configure_logging`` once at startup.
"""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: int = logging.INFO, log_file: Path | str | None = None
) -> logging.Logger:
    """Attach stream (and optionally file) handlers to the package logger.

    Calling it again replaces the handlers instead of stacking them.
    """
    logger = logging.getLogger("arch_graph_sync")
    logger.setLevel(level)
    if logger.handlers:
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
