"""
Logging setup for the ``soldo`` logger hierarchy.

The library logs through module level loggers and never touches the root
logger.  :py:func:`configure_logging` wires the ``soldo`` logger to a stream or
a file according to :py:class:`~soldo.config.Config`.
"""
import datetime
import json
import logging

from .config import Config

LOGGER_NAME = "soldo"


class JsonFormatter(logging.Formatter):
    """
    Formats records as one JSON object per line.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_object = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, tz=datetime.timezone.utc
            ).isoformat(),
            "severity": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_object, default=str)


MANAGED_ATTRIBUTE = "_soldo_managed"


def _is_managed(handler: logging.Handler) -> bool:
    return getattr(handler, MANAGED_ATTRIBUTE, False)


def configure_logging(config: Config) -> logging.Logger:
    """
    Configures the ``soldo`` logger from ``config``.

    Only handlers installed by a previous call are replaced; handlers the
    application attached itself are left in place.
    """
    logger = logging.getLogger(LOGGER_NAME)

    for existing in list(logger.handlers):
        if _is_managed(existing):
            logger.removeHandler(existing)
            existing.close()

    handler: logging.Handler
    if not config.log_enabled:
        if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
            handler = logging.NullHandler()
            setattr(handler, MANAGED_ATTRIBUTE, True)
            logger.addHandler(handler)
        return logger

    if config.log_file:
        handler = logging.FileHandler(config.log_file)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    setattr(handler, MANAGED_ATTRIBUTE, True)
    logger.addHandler(handler)
    logger.setLevel(config.log_level)
    return logger
