"""
Colonne comuni a tutte le tabelle: identificativo opaco e timestamp.
"""

import uuid
from datetime import datetime, timezone

from znote.extensions import db


def new_id() -> str:
    """Chiave primaria opaca (UUID4 come stringa di 36 caratteri)."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # UTC naive: sia DATETIME di MySQL sia SQLite scartano l'offset
    return datetime.now(timezone.utc).replace(tzinfo=None)


TITLE_MAX_LENGTH = 255


def isoformat(value):
    if value is None:
        return None
    return value.isoformat() + "Z" if value.tzinfo is None else value.isoformat()


class TimestampMixin:
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
