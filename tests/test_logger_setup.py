import logging
import os

import pytest

import logger_setup


@pytest.fixture
def log_config():
    return {
        "run_id": "unit_run",
        "logging": {"level": "DEBUG", "format": "%(levelname)s %(message)s"},
    }


@pytest.fixture
def clean_logger():
    yield logging.getLogger("fireworks")
    logger = logging.getLogger("fireworks")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_run_log_path():
    assert logger_setup.run_log_path("abc", "out") == os.path.join("out", "abc", "fireworks.log")


def test_setup_logging_writes_run_log(tmp_path, log_config, clean_logger):
    log_root = str(tmp_path / "runs")

    logger = logger_setup.setup_logging(log_config, log_root=log_root)
    assert logger is clean_logger
    assert logger.propagate is False
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    # Calling again replaces the handlers instead of stacking them.
    logger = logger_setup.setup_logging(log_config, log_root=log_root)
    assert len(logger.handlers) == 2

    logger.info("burst launched")
    for handler in logger.handlers:
        handler.flush()
    log_text = (tmp_path / "runs" / "unit_run" / "fireworks.log").read_text()
    assert "Logging initialized. Run ID: unit_run" in log_text
    assert "INFO burst launched" in log_text


def test_setup_logging_quiets_numba(tmp_path, log_config, clean_logger):
    logger_setup.setup_logging(log_config, log_root=str(tmp_path))
    assert logging.getLogger("numba").level == logging.WARNING
