"""
Repository per Note.
"""
from znote.models import Note
from znote.repositories.base import OwnedRepository


class NoteRepository(OwnedRepository[Note]):
    def __init__(self, session):
        super().__init__(session, Note)

    def default_order(self):
        """Prima le note fissate, poi le più recenti."""
        return (Note.is_pinned.desc(), Note.created_at.desc())
