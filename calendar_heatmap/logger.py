"""
Logging configuration for the calendar heatmap.
Console logging always; file logging only when a log directory is configured.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional
from .config import LOG_LEVEL, LOG_FORMAT

LOG_DIR_ENV = "CALENDAR_HEATMAP_LOG_DIR"
LOG_FILE_NAME = "calendar_heatmap.log"

# One file handler shared by every module logger
_file_handler: Optional[logging.FileHandler] = None


def _get_file_handler() -> Optional[logging.FileHandler]:
    """File handler in $CALENDAR_HEATMAP_LOG_DIR, or None when unset."""
    global _file_handler
    log_dir = os.environ.get(LOG_DIR_ENV)
    if not log_dir:
        return None
    if _file_handler is None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        _file_handler = logging.FileHandler(path / LOG_FILE_NAME)
        _file_handler.setLevel(logging.DEBUG)
        _file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return _file_handler


def setup_logger(name: str) -> logging.Logger:
    """
    Set up a module logger.
    
    Args:
        name: Name of the logger (typically __name__)
        
    Returns:
        Logger with a stdout handler (INFO and above) and, when
        CALENDAR_HEATMAP_LOG_DIR is set, the shared DEBUG file handler
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, LOG_LEVEL))
    
    # Re-running setup must not stack handlers
    logger.handlers.clear()
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)
    
    file_handler = _get_file_handler()
    if file_handler is not None:
        logger.addHandler(file_handler)
    
    return logger


def log_daily_values_stats(values, logger: logging.Logger, name: str = "Daily values"):
    """Log statistics about an aggregated daily series."""
    if not values:
        logger.warning(f"{name}: no days")
        return
    
    logger.info(
        f"{name}: {len(values)} days, "
        f"date range: {values[0].date} to {values[-1].date}, "
        f"max: {max(v.value for v in values)}"
    )
