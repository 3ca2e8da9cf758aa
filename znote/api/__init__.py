"""
Package delle API JSON usate dal client web.

Contiene:
- api_auth_bp  -> registrazione, login, profilo
- api_notes_bp -> CRUD note + sync
- api_tasks_bp -> CRUD task + sync
- api_ideas_bp -> CRUD idee + sync + ricerca
"""

from .api_auth import api_auth_bp
from .api_notes import api_notes_bp
from .api_tasks import api_tasks_bp
from .api_ideas import api_ideas_bp

__all__ = [
    "api_auth_bp",
    "api_notes_bp",
    "api_tasks_bp",
    "api_ideas_bp",
]
