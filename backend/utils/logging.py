"""Logging setup shared by the API server and the CLI."""

import logging

from backend.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "urllib3")


def setup_logging(level: str | None = None):
    """Configure the root logger. Safe to call more than once."""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level_name)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
