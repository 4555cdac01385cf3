import logging

from shortduid.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logger(level=None):
    """Configures process logging for the service and returns the package logger.

    Only entry points call this; library modules log through child loggers of
    ``shortduid`` and leave handler setup to the host application.
    """
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )

    app_logger = logging.getLogger("shortduid")
    app_logger.setLevel((level or settings.LOG_LEVEL).upper())

    return app_logger
