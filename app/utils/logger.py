# app/utils/logger.py
"""
Logging setup shared by every module.
Console plus a rotating file under settings.LOG_DIR (default: logs/ at the
project root). Entries, withdrawals and exports log at INFO, missing
sessions at WARNING, storage failures at ERROR.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from app.config import settings

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_configured = False


def log_path() -> str:
    log_dir = settings.LOG_DIR or os.path.join(PROJECT_ROOT, "logs")
    return os.path.join(log_dir, settings.LOG_FILE)


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    path = log_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)

    handlers = [
        logging.StreamHandler(),
        RotatingFileHandler(
            filename=path,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        ),
    ]

    root = logging.getLogger()
    root.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(fmt)
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Named logger; the root logger is configured on first use."""
    _configure_root_logger()
    return logging.getLogger(name)
