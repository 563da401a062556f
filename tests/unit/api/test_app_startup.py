"""Tests for logging setup."""

import json
import logging

from loguru import logger

from src.inventory.api.utils.app_startup import InterceptHandler, configure_logging
from src.inventory.runtime.config.config_data import ConfigData


def test_json_file_sink(tmp_path):
    config = ConfigData()
    config.logging.format = "json"
    config.logging.file = str(tmp_path / "logs" / "inventory.log")

    configure_logging(config)
    logger.bind(book_id=7).info("Book created")
    logger.complete()
    configure_logging(ConfigData())

    lines = (tmp_path / "logs" / "inventory.log").read_text().splitlines()
    records = [json.loads(line)["record"] for line in lines]
    created = next(r for r in records if r["message"] == "Book created")
    assert created["extra"]["book_id"] == 7
    assert created["extra"]["request_id"] == "-"


def test_stdlib_records_reach_loguru():
    configure_logging(ConfigData())
    messages = []
    sink_id = logger.add(lambda message: messages.append(message.record), level="INFO")
    try:
        logging.getLogger("inventory.test").warning("from stdlib")
    finally:
        logger.remove(sink_id)

    record = next(r for r in messages if r["message"] == "from stdlib")
    assert record["level"].name == "WARNING"
    assert record["extra"]["logger_name"] == "inventory.test"


def test_uvicorn_access_records_are_dropped():
    messages = []
    sink_id = logger.add(lambda message: messages.append(message), level="DEBUG")
    try:
        record = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, "GET /", None, None)
        InterceptHandler().emit(record)
    finally:
        logger.remove(sink_id)

    assert messages == []
