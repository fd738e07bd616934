"""
Logging for the cashew storefront.

All application loggers live under one namespace ("cashew_store") so a
single setup call controls them. Each HTTP request is given a short id;
every record logged while serving it carries that id, and the id is sent
back to the client in the X-Request-ID header so a reported problem can
be matched to its log lines.

Output:
    stdout                      every record at or above the log level
    logs/cashew_store.log       same, rotated (file logging only)
    logs/cashew_store_error.log ERROR and CRITICAL, rotated (file logging only)

Line layout:
    2026-10-19 10:15:30 [INFO    ] [-      ] cashew_store.app - Application initialized successfully
    2026-10-19 10:15:31 [INFO    ] [k3f9a0b] cashew_store.app - GET /api/products 200 in 4ms

Wiring:
    root = setup_logging(log_level=logging.INFO, enable_file_logging=False)
    init_request_logging(app)

    logger = get_logger(__name__)   # in any module
"""

import logging
import sys
import time
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from flask import Flask, g, has_request_context, request

APP_LOGGER_NAME = "cashew_store"

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] [%(request_id)-7s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_LENGTH = 7


class RequestContextFilter(logging.Filter):
    """
    Stamps ``record.request_id`` with the id of the request being served.

    Records emitted at startup, from background threads or anywhere else
    outside a Flask request get "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = g.get("request_id", "-") if has_request_context() else "-"
        return True


def _attach(
    logger: logging.Logger,
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
    request_filter: logging.Filter,
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(request_filter)
    logger.addHandler(handler)
    return handler


def _rotating(path: Path) -> RotatingFileHandler:
    return RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )


def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    (Re)configure the application logger.

    Calling this again replaces the previous handlers, closing any open
    log files first.

    Args:
        app_name: Namespace logger to configure
        log_level: Minimum level for stdout and the main log file
        log_dir: Where log files go (default: ./logs next to this file)
        enable_file_logging: Add the two rotating file handlers

    Returns:
        The namespace logger
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    # Records stop here; the root logger would print them a second time
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    request_filter = RequestContextFilter()

    _attach(logger, logging.StreamHandler(sys.stdout), log_level, formatter, request_filter)

    if enable_file_logging:
        log_dir = Path(log_dir) if log_dir else Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        main_log = log_dir / f"{app_name}.log"
        _attach(logger, _rotating(main_log), log_level, formatter, request_filter)
        _attach(logger, _rotating(log_dir / f"{app_name}_error.log"), logging.ERROR, formatter, request_filter)
        logger.info(f"Writing logs to {main_log}")

    logger.info(f"Log level {logging.getLevelName(log_level)}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module, placed under the application namespace.

    ``get_logger("services.cart_store")`` -> "cashew_store.services.cart_store".
    Names already in the namespace are used unchanged.
    """
    if name == APP_LOGGER_NAME or name.startswith(APP_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


def init_request_logging(app: Flask, path_prefix: str = "/api") -> None:
    """
    Give every request an id and log one completion line per API call.

    Args:
        app: Flask application
        path_prefix: Only requests under this path get a completion line
    """
    logger = get_logger("app")

    @app.before_request
    def _start_request():
        g.request_id = uuid.uuid4().hex[:REQUEST_ID_LENGTH]
        g.request_start = time.perf_counter()

    @app.after_request
    def _finish_request(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id

        if request.path.startswith(path_prefix):
            started = g.get("request_start")
            elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
            logger.info(f"{request.method} {request.path} {response.status_code} in {elapsed_ms:.0f}ms")
        return response
