"""
Modello Task (tabella: tasks).

La priorità è uno dei valori di ``TASK_PRIORITIES``; la scadenza è opzionale.
"""

from znote.extensions import db
from znote.models.mixins import TITLE_MAX_LENGTH, TimestampMixin, isoformat, new_id

TASK_PRIORITIES = ("low", "medium", "high")
DEFAULT_TASK_PRIORITY = "medium"


class Task(TimestampMixin, db.Model):
    __tablename__ = "tasks"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    description = db.Column(db.Text, nullable=True)
    completed = db.Column(db.Boolean, nullable=False, default=False, index=True)
    priority = db.Column(
        db.String(16), nullable=False, default=DEFAULT_TASK_PRIORITY
    )
    due_date = db.Column(db.DateTime, nullable=True, index=True)

    user = db.relationship("User", back_populates="tasks")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority,
            "due_date": isoformat(self.due_date),
            "user_id": self.user_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Task id={self.id} completed={self.completed}>"
