import logging
import os
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _resolve_level(level):
    if level is not None:
        return level
    name = os.getenv('LOG_LEVEL', 'INFO').upper()
    return getattr(logging, name, logging.INFO)


def setup_logger(name, level=None):
    """
    Set up a logger with the given name and level.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (default: LOG_LEVEL env var, else INFO)

    Returns:
        Configured logger instance
    """
    level = _resolve_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Only add handlers if they don't exist
    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        # Also log to file
        project_root = Path(__file__).parent.parent.parent
        log_dir = os.getenv('LOG_DIR') or os.path.join(project_root, 'logs')
        os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(os.path.join(log_dir, 'app.log'))
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
