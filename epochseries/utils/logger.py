"""
Logging setup for epochseries entry points.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    run_dir: Optional[Path] = None,
    log_file: str = "epochseries.log",
    level: Union[int, str] = logging.INFO,
) -> logging.Logger:
    """
    Configure the ``epochseries`` logger.

    Args:
        run_dir: Directory for a log file (console only if None)
        log_file: File name inside ``run_dir``
        level: Logging level (int or name)

    Returns:
        The package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("epochseries")
    logger.setLevel(level)

    # Replace handlers from an earlier call instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if run_dir is not None:
        run_dir = Path(run_dir)
        run_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(run_dir / log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
