"""
API JSON per le note.

Tutte le route richiedono un token bearer. L'elenco mette prima le note
fissate, poi le più recenti.
"""

from flask import Blueprint

from znote.api._content import register_content_routes
from znote.middleware.auth import require_auth
from znote.services import note_service

api_notes_bp = Blueprint("api_notes", __name__)

require_auth(api_notes_bp)
register_content_routes(api_notes_bp, note_service)
