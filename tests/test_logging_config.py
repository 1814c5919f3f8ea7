import logging

import pytest

from mentor_admin_api.app.core.logging_config import PACKAGE_LOGGER, build_handlers, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logger.level
    yield logger
    logger.setLevel(level)


@pytest.mark.parametrize("level, expected", [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("loud", logging.INFO)])
def test_setup_logging_sets_package_level(package_logger, level, expected):
    setup_logging(level)
    assert package_logger.level == expected


def test_setup_logging_keeps_existing_root_handlers(package_logger):
    root = logging.getLogger()
    marker = logging.NullHandler()
    root.addHandler(marker)
    try:
        before = list(root.handlers)
        setup_logging("INFO")
        assert root.handlers == before
    finally:
        root.removeHandler(marker)


def test_build_handlers_adds_file_handler(tmp_path):
    handlers = build_handlers(str(tmp_path / "api.log"))
    try:
        assert [type(handler) for handler in handlers] == [logging.StreamHandler, logging.FileHandler]
    finally:
        for handler in handlers:
            handler.close()
