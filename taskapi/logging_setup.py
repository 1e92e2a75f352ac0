import logging
import sys

PACKAGE_LOGGER = "taskapi"

_handler = None


def setup_logging(level="INFO") -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    Safe to call more than once: the handler is only installed the first time,
    later calls just adjust the level.
    """
    global _handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    if _handler not in logger.handlers:
        logger.addHandler(_handler)

    return logger
