"""
Package dei modelli SQLAlchemy.

Espone le classi dei modelli.
"""

from .user import User
from .note import Note
from .task import Task
from .idea import Idea

__all__ = [
    "User",
    "Note",
    "Task",
    "Idea",
]
