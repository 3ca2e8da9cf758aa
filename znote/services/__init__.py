"""
Package dei servizi (logica di business).

I servizi orchestrano:
- repository (accesso al DB, sempre limitato al proprietario per i contenuti)
- validazione e transazioni
- logging strutturato
"""

from .auth_service import get_profile, login_user, register_user
from .content_service import ContentService
from .note_service import NoteService, note_service
from .task_service import TaskService, task_service
from .idea_service import IdeaService, idea_service

__all__ = [
    # Autenticazione
    "register_user",
    "login_user",
    "get_profile",
    # Contenuti
    "ContentService",
    "NoteService",
    "note_service",
    "TaskService",
    "task_service",
    "IdeaService",
    "idea_service",
]
