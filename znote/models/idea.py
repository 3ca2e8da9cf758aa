"""
Modello Idea (tabella: ideas).

I tag sono salvati come lista JSON ordinata di stringhe.
"""

from znote.extensions import db
from znote.models.mixins import TITLE_MAX_LENGTH, TimestampMixin, isoformat, new_id

DEFAULT_IDEA_CATEGORY = "general"
CATEGORY_MAX_LENGTH = 64


class Idea(TimestampMixin, db.Model):
    __tablename__ = "ideas"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(
        db.String(CATEGORY_MAX_LENGTH),
        nullable=False,
        default=DEFAULT_IDEA_CATEGORY,
        index=True,
    )
    tags = db.Column(db.JSON, nullable=False, default=list)

    user = db.relationship("User", back_populates="ideas")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags or []),
            "user_id": self.user_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def has_tag(self, value: str) -> bool:
        """Verifica la presenza esatta di un tag, senza distinzione maiuscole/minuscole."""
        wanted = value.lower()
        return any(str(tag).lower() == wanted for tag in (self.tags or []))

    def __repr__(self) -> str:
        return f"<Idea id={self.id} category={self.category!r}>"
