import logging
from logging.handlers import RotatingFileHandler

import pytest

from inventory_data import pipeline_config
from inventory_data.utils import logging_utils


@pytest.fixture
def fresh_logger_name(request):
    name = f"tests.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_get_logger_writes_to_the_given_file(tmp_path, fresh_logger_name):
    log_file = tmp_path / "nested" / "dashboard.log"
    logger = logging_utils.get_logger(fresh_logger_name, log_file=log_file)
    logger.info("loaded 3 rows")
    for handler in logger.handlers:
        handler.flush()

    assert "loaded 3 rows" in log_file.read_text(encoding="utf-8")
    assert fresh_logger_name in log_file.read_text(encoding="utf-8")


def test_get_logger_adds_handlers_once(tmp_path, fresh_logger_name):
    log_file = tmp_path / "dashboard.log"
    logger = logging_utils.get_logger(fresh_logger_name, log_file=log_file)
    again = logging_utils.get_logger(fresh_logger_name, log_file=log_file)

    assert again is logger
    assert sum(isinstance(h, RotatingFileHandler) for h in logger.handlers) == 1
    assert len(logger.handlers) == 2


def test_get_logger_level_follows_config(tmp_path, monkeypatch, fresh_logger_name):
    monkeypatch.setattr(pipeline_config, "LOG_LEVEL", "WARNING")
    logger = logging_utils.get_logger(fresh_logger_name, log_file=tmp_path / "dashboard.log")
    assert logger.level == logging.WARNING

    logging_utils.get_logger(fresh_logger_name, log_file=tmp_path / "dashboard.log", level="DEBUG")
    assert logger.level == logging.DEBUG
