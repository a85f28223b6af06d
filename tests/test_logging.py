"""Tests for logging utilities."""

import logging
from io import StringIO

import pytest

from dfopt.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from dfopt.optimize import BracketTriple, bracket_minimum, brent_refine


@pytest.fixture
def restore_logging():
    yield
    configure_logging(level=logging.WARNING)


def test_get_logger_prefixes_name():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "dfopt.test_module"


def test_get_logger_keeps_package_names():
    assert get_logger("dfopt.optimize.powell").name == "dfopt.optimize.powell"
    assert get_logger().name == "dfopt"


def test_get_logger_returns_same_logger():
    assert get_logger("test_module") is get_logger("test_module")


def test_package_logger_owns_the_handler():
    package = get_logger()
    assert package.propagate is False
    assert len(package.handlers) == 1
    child = get_logger("test_module")
    assert child.handlers == []
    assert child.parent is package


def test_set_log_level_string(restore_logging):
    logger = get_logger("test_module")

    set_log_level("debug")
    assert logger.getEffectiveLevel() == logging.DEBUG

    set_log_level(logging.ERROR)
    assert logger.getEffectiveLevel() == logging.ERROR
    assert not logger.isEnabledFor(logging.WARNING)


def test_configure_logging_replaces_handler(restore_logging):
    configure_logging(level=logging.INFO, stream=StringIO())
    configure_logging(level=logging.INFO, stream=StringIO())
    assert len(get_logger().handlers) == 1


def test_engine_debug_output(restore_logging):
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    triple, _ = bracket_minimum(lambda x: (x - 0.2) ** 2, -1.0, 1.0, 5)
    brent_refine(lambda x: (x - 0.2) ** 2, triple)

    output = stream.getvalue()
    assert "dfopt.optimize.bracket" in output
    assert "Brent stopped" in output


def test_engine_quiet_by_default(restore_logging):
    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    brent_refine(lambda x: x * x, BracketTriple(-1.0, 1.0, 0.1, 0.01, 1.0, 1.0))
    assert stream.getvalue() == ""


def test_abandoned_extension_warns(restore_logging):
    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream, format_string="%(message)s")
    bracket_minimum(lambda x: -x, 0.0, 1.0, 3)
    assert "Boundary extension abandoned" in stream.getvalue()
