"""
Repository per Task.
"""
from znote.models import Task
from znote.repositories.base import OwnedRepository


class TaskRepository(OwnedRepository[Task]):
    def __init__(self, session):
        super().__init__(session, Task)

    def default_order(self):
        """Prima le non completate, poi per scadenza più vicina (senza scadenza in fondo), poi le più recenti."""
        return (
            Task.completed.asc(),
            Task.due_date.is_(None).asc(),
            Task.due_date.asc(),
            Task.created_at.desc(),
        )
