"""
Servizi per le idee, compresa la ricerca per testo e tag.
"""

from __future__ import annotations

from typing import Any, List, Optional

from znote.errors import ValidationError
from znote.models.idea import CATEGORY_MAX_LENGTH, DEFAULT_IDEA_CATEGORY
from znote.models.mixins import TITLE_MAX_LENGTH
from znote.services.content_service import (
    ContentService,
    check_length,
    clean_optional_text,
    clean_required_text,
)
from znote.services.unit_of_work import UnitOfWork


class IdeaService(ContentService):
    entity = "idea"
    plural = "ideas"
    repository = "ideas"
    fields = ("title", "description", "category", "tags")
    required = ("title", "description")
    required_message = "Title and description are required"
    defaults = {"category": DEFAULT_IDEA_CATEGORY, "tags": list}

    def clean_title(self, value: Any) -> str:
        return clean_required_text("Title", value, TITLE_MAX_LENGTH)

    def clean_description(self, value: Any) -> str:
        return clean_required_text("Description", value)

    def clean_category(self, value: Any) -> Optional[str]:
        value = clean_optional_text("Category", value)
        if value is None or not value.strip():
            return None
        return check_length("Category", value.strip(), CATEGORY_MAX_LENGTH)

    def clean_tags(self, value: Any) -> Optional[List[str]]:
        if value is None:
            return None
        if not isinstance(value, list):
            raise ValidationError("Tags must be a list of strings")
        tags = []
        for tag in value:
            if not isinstance(tag, str):
                raise ValidationError("Tags must be a list of strings")
            tag = tag.strip()
            if tag:
                tags.append(tag)
        return tags

    def list(self, owner_id: str, category: Optional[str] = None):
        with UnitOfWork() as uow:
            return uow.ideas.list_by_category(owner_id, category)

    def search(self, owner_id: str, query: Optional[str]):
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Search query is required")
        with UnitOfWork() as uow:
            return uow.ideas.search(owner_id, query.strip())


idea_service = IdeaService()
