"""Loguru sinks for the coaching engine.

Structured keyword arguments passed to ``logger.info(...)`` land in
``record["extra"]``; both sinks render them so runner ids, week ranges and
durations stay visible.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> | {extra}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message} | {extra}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    *,
    serialize_file: bool = False,
) -> None:
    """Replace loguru's default sink with the engine's console and file sinks.

    Args:
        level: Minimum level for both sinks
        log_file: Optional log file path; console only when None
        rotation: File rotation trigger (size or interval)
        retention: How long rotated files are kept
        serialize_file: Write the file sink as JSON lines instead of text
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=serialize_file,
            enqueue=True,
        )

    logger.debug("Logging configured", level=level, log_file=log_file)
