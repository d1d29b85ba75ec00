import logging

import pytest

from cmake_wrapping.utils.logging import make_logger, package_logger, setup_logging


def test_setup_logging_sets_package_level():
    logger = make_logger("cmake_wrapping.test")
    setup_logging("warning", logger)
    assert package_logger.level == logging.WARNING
    assert logger.level == logging.WARNING


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("loud", make_logger("cmake_wrapping.test"))
