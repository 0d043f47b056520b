"""Logging configuration for the catalog service and its client."""

import logging
import sys

from vidto.config import Settings, settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# One logger per concern; levels are (re)applied together by configure_logging
CATALOG_LOGGERS = ("app", "database", "cache", "api", "client")

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)


def level_for(config: Settings) -> int:
    """
    Pick the level for the catalog loggers.

    ``debug`` always wins. Production logs at INFO, test runs only surface
    warnings, and any other environment logs everything.
    """
    if config.debug:
        return logging.DEBUG
    if config.is_production:
        return logging.INFO
    if config.environment == "test":
        return logging.WARNING
    return logging.DEBUG


def get_logger(name: str, config: Settings | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level_for(config or settings))
    return logger


def configure_logging(config: Settings) -> None:
    """Re-level every catalog logger for settings other than the environment's."""
    for name in CATALOG_LOGGERS:
        get_logger(name, config)


app_logger = get_logger("app")
db_logger = get_logger("database")
cache_logger = get_logger("cache")
api_logger = get_logger("api")
client_logger = get_logger("client")
