"""
Modello Note (tabella: notes).
"""

from znote.extensions import db
from znote.models.mixins import TITLE_MAX_LENGTH, TimestampMixin, isoformat, new_id

DEFAULT_NOTE_COLOR = "#ffffff"


class Note(TimestampMixin, db.Model):
    __tablename__ = "notes"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    content = db.Column(db.Text, nullable=False)
    color = db.Column(db.String(16), nullable=False, default=DEFAULT_NOTE_COLOR)
    is_pinned = db.Column(db.Boolean, nullable=False, default=False)

    user = db.relationship("User", back_populates="notes")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "color": self.color,
            "is_pinned": self.is_pinned,
            "user_id": self.user_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Note id={self.id} user_id={self.user_id}>"
