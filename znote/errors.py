"""
Tassonomia degli errori del livello servizi e traduzione in risposte JSON.

I servizi sollevano queste eccezioni; gli handler registrati da
``register_error_handlers`` le trasformano in corpi ``{"error": message}`` con
lo status HTTP corrispondente: nessuna eccezione esce dall'API non gestita.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from znote.extensions import db

logger = logging.getLogger(__name__)


class ZnoteError(Exception):
    """Classe base di tutti gli errori che l'API restituisce ai chiamanti."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ZnoteError):
    """Campo mancante o non valido nella richiesta."""

    status_code = 400
    default_message = "Invalid request"


class AuthError(ZnoteError):
    """Token mancante, non valido o scaduto, oppure credenziali errate."""

    status_code = 401
    default_message = "Authentication failed"


class NotFoundError(ZnoteError):
    """Record assente o non appartenente al chiamante."""

    status_code = 404
    default_message = "Not found"


class ConflictError(ZnoteError):
    """Valore univoco duplicato (es. email già registrata)."""

    status_code = 400
    default_message = "Resource already exists"


class InternalError(ZnoteError):
    """Errore imprevisto (database non raggiungibile, ...)."""

    status_code = 500


def error_response(message: str, status_code: int):
    return jsonify({"error": message}), status_code


def register_error_handlers(app: Flask) -> None:
    """Registra sull'app gli handler di errore JSON."""

    @app.errorhandler(ZnoteError)
    def handle_znote_error(exc: ZnoteError):
        if exc.status_code >= 500:
            logger.error("Errore di servizio: %s", exc.message)
        return error_response(exc.message, exc.status_code)

    @app.errorhandler(404)
    def handle_not_found(exc):
        return error_response("Route not found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(exc):
        return error_response("Method not allowed", 405)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        return error_response(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(exc: SQLAlchemyError):
        db.session.rollback()
        logger.exception("Errore database")
        return error_response("Internal server error", 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        db.session.rollback()
        logger.exception("Errore non gestito")
        return error_response("Internal server error", 500)
