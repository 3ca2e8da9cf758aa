"""
Estensioni Flask condivise (database, logging).
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

# Istanza globale di SQLAlchemy, collegata all'app in create_app()
db = SQLAlchemy()


class JsonFormatter(logging.Formatter):
    """
    Formatter che produce ogni record come una singola riga JSON.

    Campi principali:
    - timestamp: ISO 8601 (UTC)
    - level: livello di log (INFO, ERROR, ecc.)
    - logger: nome del logger
    - module: modulo sorgente
    - message: messaggio di log
    - extra: eventuali campi passati come extra={...}
    """

    # Attributi standard del LogRecord; tutto il resto arriva da extra={...}
    STANDARD_ATTRS = {
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "taskName", "message",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.STANDARD_ATTRS
        }
        if extra_fields:
            log_record["extra"] = extra_fields

        return json.dumps(log_record, ensure_ascii=False, default=str)


def init_extensions(app: Flask) -> None:
    """Collega il database e installa il logging JSON. Chiamata da create_app()."""
    db.init_app(app)
    _init_logging(app)


def _build_handlers(app: Flask, level: int) -> List[logging.Handler]:
    """Handler su console sempre; handler su file rotante solo se LOG_DIR è impostata."""
    formatter = JsonFormatter()
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    log_dir = app.config.get("LOG_DIR")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                os.path.join(log_dir, app.config.get("LOG_FILE_NAME", "znote.log")),
                maxBytes=5 * 1024 * 1024,  # 5 MB
                backupCount=3,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def _init_logging(app: Flask) -> None:
    level_name = app.config.get("LOG_LEVEL", "INFO")
    level = getattr(logging, level_name.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # La factory viene chiamata a ogni test: si tiene il primo set di handler
    if not getattr(root_logger, "_json_logging_configured", False):
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        for handler in _build_handlers(app, level):
            root_logger.addHandler(handler)
        root_logger._json_logging_configured = True  # type: ignore[attr-defined]

    app.logger.setLevel(level)
    app.logger.info(
        "Logging JSON inizializzato.",
        extra={"component": "logging", "log_dir": app.config.get("LOG_DIR") or None, "level": level_name},
    )
