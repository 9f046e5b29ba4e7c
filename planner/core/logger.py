"""loguru sinks for the planner CLI.

Terminal output stays short because rich already prints the command
results; the optional file sink keeps timestamps and call sites for
debugging API traffic.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"
FILE_ROTATION = "5 MB"
FILE_RETENTION = 3


def setup_logger(level: str = "INFO", log_file: str | Path | None = None) -> Path | None:
    """Replace loguru's default sink with the planner sinks.

    Args:
        level: Minimum level for every sink
        log_file: Path of a rotating log file (PLANNER_LOG_FILE). None keeps
            logging on stderr only.

    Returns:
        The resolved log file path, or None when no file sink was added
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if not log_file:
        return None

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        path,
        format=FILE_FORMAT,
        level=level,
        rotation=FILE_ROTATION,
        retention=FILE_RETENTION,
        encoding="utf-8",
    )
    logger.debug(f"[LOG] Writing {level} logs to {path}")
    return path
