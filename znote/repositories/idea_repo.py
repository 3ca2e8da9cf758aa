"""
Repository per Idea.
"""
from typing import List, Optional

from znote.models import Idea
from znote.repositories.base import OwnedRepository


class IdeaRepository(OwnedRepository[Idea]):
    def __init__(self, session):
        super().__init__(session, Idea)

    def list_by_category(self, owner_id: str, category: Optional[str] = None) -> List[Idea]:
        if category:
            return self.list_owned(owner_id, category=category)
        return self.list_owned(owner_id)

    def search(self, owner_id: str, query: str) -> List[Idea]:
        """
        Corrispondenza parziale su titolo/descrizione, oppure corrispondenza
        esatta su un tag, senza distinzione maiuscole/minuscole. Più recenti prima.

        I tag stanno in una colonna JSON: il confronto gira in Python sulle righe
        del proprietario, e il testo usa lo stesso passaggio per un unico ordinamento.
        """
        needle = query.lower()
        return [
            idea
            for idea in self.list_owned(owner_id)
            if needle in (idea.title or "").lower()
            or needle in (idea.description or "").lower()
            or idea.has_tag(query)
        ]
