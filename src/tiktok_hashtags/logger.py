"""
Logging setup shared by every module of the hashtag scraper.

Each module calls setup_logger('<module>') once at import time. Records go
to a daily rotating file with everything, a daily rotating file with errors
only, and the console.
"""

import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler

DEFAULT_LOG_DIR = os.environ.get('LOG_DIR', 'logs')
CONSOLE_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _rotating_handler(log_dir, prefix, level, formatter):
    path = os.path.join(
        log_dir, f'{prefix}_{datetime.now().strftime("%Y%m%d")}.log'
    )
    handler = RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(name, log_dir=None):
    """
    Returns the logger for a module, attaching its handlers on first use.

    Args:
        name: Logger name, usually the module name
        log_dir: Directory for the log files; LOG_DIR or 'logs' by default

    Returns:
        Configured logging.Logger
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    log_dir = log_dir or DEFAULT_LOG_DIR
    os.makedirs(log_dir, exist_ok=True)

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)

    logger.addHandler(
        _rotating_handler(log_dir, 'scraper_all', logging.DEBUG, formatter)
    )
    logger.addHandler(
        _rotating_handler(log_dir, 'scraper_errors', logging.ERROR, formatter)
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, CONSOLE_LEVEL, logging.INFO))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
