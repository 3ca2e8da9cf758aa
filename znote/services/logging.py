"""Eventi di business strutturati emessi dai servizi (logger ``znote.events``)."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import has_request_context, request

events_logger = logging.getLogger("znote.events")


def _request_fields() -> Dict[str, Any]:
    if not has_request_context():
        return {}
    return {"http_method": request.method, "path": request.path}


def log_structured_event(
    action: str,
    *,
    message: Optional[str] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """
    Registra ``action`` con ``fields`` come extra JSON, più metodo HTTP e path
    quando chiamata durante una richiesta.

    I nomi dei campi non devono coincidere con attributi del LogRecord (``name``,
    ``message``, ``module``...).
    """
    log_method = getattr(events_logger, level.lower(), events_logger.info)

    payload: Dict[str, Any] = {"action": action, **_request_fields(), **fields}
    try:
        log_method(message or action.replace(".", " "), extra=payload)
    except (KeyError, TypeError, ValueError):
        events_logger.debug("Evento strutturato scartato %s", action, exc_info=True)
