import logging
import os

NOISY_LOGGERS = ("urllib3", "requests", "sqlalchemy.engine", "watchdog")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level_name=None):
    """Set up root logging once per process; later calls only adjust the level."""
    level_name = (level_name or os.getenv("GOALS_LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return level
