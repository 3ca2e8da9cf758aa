"""
Unit of Work Pattern.
Una transazione per richiesta, condivisa dai repository di utenti e contenuti.
"""
from typing import Dict, Type

from znote.extensions import db
from znote.repositories import (
    IdeaRepository,
    NoteRepository,
    TaskRepository,
    UserRepository,
)


class UnitOfWork:
    def __init__(self):
        self.session = db.session
        self._repositories: Dict[type, object] = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
        return False

    def _repository(self, repo_cls: Type):
        # Creato al primo uso, poi riusato per il resto della unit
        repo = self._repositories.get(repo_cls)
        if repo is None:
            repo = self._repositories[repo_cls] = repo_cls(self.session)
        return repo

    @property
    def users(self) -> UserRepository:
        return self._repository(UserRepository)

    @property
    def notes(self) -> NoteRepository:
        return self._repository(NoteRepository)

    @property
    def tasks(self) -> TaskRepository:
        return self._repository(TaskRepository)

    @property
    def ideas(self) -> IdeaRepository:
        return self._repository(IdeaRepository)

    def commit(self):
        try:
            self.session.commit()
        except Exception:
            self.rollback()
            raise

    def rollback(self):
        self.session.rollback()
