"""
Repository per User (archivio credenziali).
"""
from typing import Optional

from znote.models import User
from znote.repositories.base import SqlAlchemyRepository


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Ricerca esatta per email (sensibile alle maiuscole)."""
        if not email:
            return None
        return self.session.query(User).filter_by(email=email).first()

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None
