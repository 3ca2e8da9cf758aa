"""
Servizi per le note.
"""

from __future__ import annotations

import re
from typing import Any

from znote.errors import ValidationError
from znote.models.mixins import TITLE_MAX_LENGTH
from znote.models.note import DEFAULT_NOTE_COLOR
from znote.services.content_service import (
    ContentService,
    clean_flag,
    clean_required_text,
)

# #rgb oppure #rrggbb
HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class NoteService(ContentService):
    entity = "note"
    plural = "notes"
    repository = "notes"
    fields = ("title", "content", "color", "is_pinned")
    required = ("title", "content")
    required_message = "Title and content are required"
    defaults = {"color": DEFAULT_NOTE_COLOR, "is_pinned": False}

    def clean_title(self, value: Any) -> str:
        return clean_required_text("Title", value, TITLE_MAX_LENGTH)

    def clean_content(self, value: Any) -> str:
        return clean_required_text("Content", value)

    def clean_color(self, value: Any):
        if value is None or value == "":
            return None
        if not isinstance(value, str) or not HEX_COLOR_RE.match(value):
            raise ValidationError("Color must be a hex string such as #ffffff")
        return value.lower()

    def clean_is_pinned(self, value: Any) -> bool:
        return clean_flag("is_pinned", value)


note_service = NoteService()
