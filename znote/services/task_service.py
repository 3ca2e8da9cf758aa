"""
Servizi per i task.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from znote.errors import ValidationError
from znote.models.mixins import TITLE_MAX_LENGTH
from znote.models.task import DEFAULT_TASK_PRIORITY, TASK_PRIORITIES
from znote.services.content_service import (
    ContentService,
    clean_flag,
    clean_optional_text,
    clean_required_text,
)


def parse_due_date(value: Any) -> Optional[datetime]:
    """
    Accetta ``YYYY-MM-DD`` oppure un datetime ISO-8601 (suffisso ``Z`` ammesso).

    I datetime con fuso vengono convertiti in UTC naive, come le colonne salvate.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError("due_date must be a date string")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed_date = date.fromisoformat(text)
        except ValueError:
            raise ValidationError("due_date must be YYYY-MM-DD or an ISO-8601 datetime")
        parsed = datetime(parsed_date.year, parsed_date.month, parsed_date.day)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class TaskService(ContentService):
    entity = "task"
    plural = "tasks"
    repository = "tasks"
    fields = ("title", "description", "completed", "priority", "due_date")
    required = ("title",)
    required_message = "Title is required"
    defaults = {"completed": False, "priority": DEFAULT_TASK_PRIORITY}

    def clean_title(self, value: Any) -> str:
        return clean_required_text("Title", value, TITLE_MAX_LENGTH)

    def clean_description(self, value: Any) -> Optional[str]:
        return clean_optional_text("Description", value)

    def clean_completed(self, value: Any) -> bool:
        return clean_flag("completed", value)

    def clean_priority(self, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        if value not in TASK_PRIORITIES:
            raise ValidationError(
                f"Priority must be one of: {', '.join(TASK_PRIORITIES)}"
            )
        return value

    def clean_due_date(self, value: Any) -> Optional[datetime]:
        return parse_due_date(value)


task_service = TaskService()
