import logging

import pytest

from vidto.config import Settings
from vidto.logger import CATALOG_LOGGERS, configure_logging, get_logger, level_for
from vidto.main import create_app


@pytest.mark.parametrize(
    "environment, debug, level",
    [
        ("production", False, logging.INFO),
        ("production", True, logging.DEBUG),
        ("test", False, logging.WARNING),
        ("test", True, logging.DEBUG),
        ("local", False, logging.DEBUG),
    ],
)
def test_level_for_environment(environment, debug, level):
    assert level_for(Settings(environment=environment, debug=debug)) == level


def test_configure_logging_relevels_every_catalog_logger():
    configure_logging(Settings(environment="production"))
    assert {logging.getLogger(name).level for name in CATALOG_LOGGERS} == {logging.INFO}

    configure_logging(Settings(environment="local"))
    assert {logging.getLogger(name).level for name in CATALOG_LOGGERS} == {logging.DEBUG}


def test_get_logger_uses_given_settings():
    logger = get_logger("vidto.tests", Settings(environment="test"))

    assert logger.level == logging.WARNING


def test_create_app_applies_its_settings(test_settings):
    create_app(test_settings)

    assert logging.getLogger("client").level == logging.WARNING
