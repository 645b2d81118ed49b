import logging
import os
from logging.handlers import RotatingFileHandler

from app.platform.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str):
    """
    Creates a logger instance that writes to console AND a file.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    logger.setLevel(level)
    # Handlers below already print; avoid a second copy through the root logger
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    log_dir = os.path.join(os.getcwd(), settings.LOG_DIR)
    os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "rental_api.log"), maxBytes=10_000_000, backupCount=5
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger
