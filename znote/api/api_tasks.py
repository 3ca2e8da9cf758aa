"""
API JSON per i task.

Tutte le route richiedono un token bearer. L'elenco mette prima i task non
completati, poi la scadenza più vicina, poi i più recenti.
"""

from flask import Blueprint

from znote.api._content import register_content_routes
from znote.middleware.auth import require_auth
from znote.services import task_service

api_tasks_bp = Blueprint("api_tasks", __name__)

require_auth(api_tasks_bp)
register_content_routes(api_tasks_bp, task_service)
