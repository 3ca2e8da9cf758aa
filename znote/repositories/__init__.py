"""
Package dei repository.
Espone le classi di accesso ai dati.
"""

from .base import OwnedRepository, SqlAlchemyRepository
from .user_repo import UserRepository
from .note_repo import NoteRepository
from .task_repo import TaskRepository
from .idea_repo import IdeaRepository

__all__ = [
    "SqlAlchemyRepository",
    "OwnedRepository",
    "UserRepository",
    "NoteRepository",
    "TaskRepository",
    "IdeaRepository",
]
