"""
Logging infrastructure.

Loggers handed out here live under the "payline" namespace and share one
stream handler format. Request log entries from the Ledyer client are
written to "payline.ledyer".
"""
import logging

ROOT_LOGGER_NAME = "payline"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str = ROOT_LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """
    Get a payline logger.

    Names outside the namespace are nested under it, so "ledyer" and
    "payline.ledyer" return the same logger. A handler is attached only
    the first time a logger is requested.

    Args:
        name: Logger name, relative to or inside "payline"
        level: Level applied when the handler is first attached

    Returns:
        Logger instance
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
        # The handler above already prints; parents would print again.
        logger.propagate = False
    return logger
