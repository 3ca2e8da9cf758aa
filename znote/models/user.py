"""
Modello User (tabella: users).

Contiene le credenziali usate dal servizio di autenticazione. Le righe di
contenuto (note, task, idee) appartengono a un solo utente.
"""

from sqlalchemy.dialects import mysql

from znote.extensions import db
from znote.models.mixins import isoformat, new_id, utcnow

EMAIL_MAX_LENGTH = 255
NAME_MAX_LENGTH = 128


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    # Salvata così come inserita alla registrazione; la collation binaria su MySQL
    # rende indice univoco e ricerche sensibili alle maiuscole
    email = db.Column(
        db.String(EMAIL_MAX_LENGTH).with_variant(
            mysql.VARCHAR(EMAIL_MAX_LENGTH, charset="utf8mb4", collation="utf8mb4_bin"),
            "mysql",
        ),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(NAME_MAX_LENGTH), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    # Relazioni
    notes = db.relationship(
        "Note", back_populates="user", lazy="dynamic", passive_deletes=True
    )
    tasks = db.relationship(
        "Task", back_populates="user", lazy="dynamic", passive_deletes=True
    )
    ideas = db.relationship(
        "Idea", back_populates="user", lazy="dynamic", passive_deletes=True
    )

    def to_dict(self, include_created: bool = False) -> dict:
        """Rappresentazione pubblica; non include mai l'hash della password."""
        data = {"id": self.id, "email": self.email, "name": self.name}
        if include_created:
            data["created_at"] = isoformat(self.created_at)
        return data

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
