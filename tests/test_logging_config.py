"""
Tests for logging setup and the request id filter.
"""

import logging
from flask import Flask, g

from logging_config import APP_LOGGER_NAME, RequestContextFilter, get_logger, setup_logging


def _record():
    return logging.LogRecord("cashew_store.test", logging.INFO, __file__, 1, "msg", None, None)


class TestRequestContextFilter:

    def test_outside_request(self):
        record = _record()
        assert RequestContextFilter().filter(record) is True
        assert record.request_id == "-"

    def test_inside_request(self):
        app = Flask(__name__)
        with app.test_request_context("/api/cart"):
            g.request_id = "abc1234"
            record = _record()
            RequestContextFilter().filter(record)

        assert record.request_id == "abc1234"


class TestSetupLogging:

    def test_console_only(self):
        logger = setup_logging(enable_file_logging=False)

        assert logger.name == APP_LOGGER_NAME
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_file_logging(self, tmp_path):
        logger = setup_logging(log_dir=tmp_path, enable_file_logging=True)
        try:
            assert len(logger.handlers) == 3
            logger.error("something broke")
            for handler in logger.handlers:
                handler.flush()

            assert "something broke" in (tmp_path / "cashew_store.log").read_text(encoding="utf-8")
            assert "something broke" in (tmp_path / "cashew_store_error.log").read_text(encoding="utf-8")
        finally:
            setup_logging(enable_file_logging=False)

    def test_reconfigure_replaces_handlers(self):
        setup_logging(enable_file_logging=False)
        logger = setup_logging(enable_file_logging=False)
        assert len(logger.handlers) == 1


class TestGetLogger:

    def test_prefixes_namespace(self):
        assert get_logger("services.cart_store").name == "cashew_store.services.cart_store"

    def test_keeps_existing_namespace(self):
        assert get_logger("cashew_store.app").name == "cashew_store.app"
