"""Logging wiring shared by the services."""
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", namespace: str = "apps") -> None:
    """Install the default formatter and set the level of ``namespace``.

    ``basicConfig`` is a no-op once the root logger has handlers, so uvicorn's
    own logging setup (or pytest's capture) is left in place.
    """
    level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(namespace).setLevel(level)
