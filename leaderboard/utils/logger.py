# leaderboard/utils/logger.py

import logging
import sys
from pathlib import Path

LOG_FORMAT = "[%(asctime)s] %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(name=None, level=logging.INFO, log_file="logs/leaderboard.log"):
    """
    Attaches stdout and file handlers to a named logger.

    Handlers are only added the first time a name is seen, so sessions can
    call this freely. Pass log_file=None to log to stdout only.
    """
    logger = logging.getLogger(name or 'leaderboard')
    if logger.handlers:
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Keep records out of the root logger.
    logger.propagate = False
    return logger
