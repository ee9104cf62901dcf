"""
Logging setup for the gateway API.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Libraries that are noisy at INFO
_QUIET_LOGGERS = ("celery", "kombu", "sqlalchemy.engine", "multipart")


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once per process."""
    logging.basicConfig(
        format=LOG_FORMAT,
        stream=sys.stdout,
        level=level.upper(),
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
