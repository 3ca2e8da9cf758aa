"""
Store lato client per note, task e idee.

Uno store tiene la lista dei record (dal più recente) più ``loading`` ed
``error``. Le modifiche passano dal backend attivo, scelto una volta per
stato di autenticazione da ``set_authenticated``:

* modalità ospite: ``LocalBackend``, lista salvata sotto ``znote-<plural>``;
  le chiamate sono sincrone e non toccano ``loading``.
* modalità autenticata: ``RemoteBackend``; ogni chiamata va da Idle a Pending
  (``loading=True``) e poi a Success (lista aggiornata) o Failure (``error``
  impostato, lista invariata).

Ogni metodo restituisce un dict di risultato e non solleva mai eccezioni.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional

from .api import ApiClient, ApiError
from .backends import (
    IDEAS,
    NOTES,
    TASKS,
    ContentKind,
    NotFound,
    Record,
    backend_for,
)
from .storage import LocalStorage

logger = logging.getLogger(__name__)


class ContentStore:
    kind: ContentKind

    def __init__(
        self,
        storage: LocalStorage,
        api: Optional[ApiClient] = None,
        authenticated: bool = False,
    ):
        self.storage = storage
        self.api = api
        self.items: List[Record] = []
        self.loading = False
        self.error: Optional[str] = None
        self.backend = None
        self.set_authenticated(authenticated)

    # ------------------------------------------------------------------
    # Modalità e persistenza
    # ------------------------------------------------------------------
    @property
    def authenticated(self) -> bool:
        return bool(self.backend and self.backend.remote)

    def set_authenticated(self, authenticated: bool) -> None:
        """Sceglie il backend. In modalità ospite ricarica la lista salvata sul dispositivo."""
        self.backend = backend_for(self.kind, authenticated, self.api)
        self.error = None
        if authenticated:
            # Riempita dal prossimo fetch()
            self.items = []
        else:
            self.items = self._load()

    def _load(self) -> List[Record]:
        state = self.storage.get(self.kind.storage_key)
        if not isinstance(state, dict):
            return []
        items = state.get(self.kind.plural)
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    def _persist(self) -> None:
        # I dati del server non vengono mai scritti sul dispositivo
        if not self.authenticated:
            self.storage.set(self.kind.storage_key, {self.kind.plural: self.items})

    def _run(self, action: str, operation):
        """
        Esegue ``operation`` sul backend gestendo loading ed error;
        restituisce ``(ok, valore_o_messaggio)``.
        """
        remote = self.authenticated
        if remote:
            self.loading = True
        self.error = None
        try:
            value = operation()
        except (ApiError, NotFound) as exc:
            message = getattr(exc, "message", None) or str(exc) or f"Failed to {action} {self.kind.entity}"
            logger.info("%s %s fallito: %s", action, self.kind.entity, message)
            self.error = message
            return False, message
        finally:
            if remote:
                self.loading = False
        return True, value

    def _failure(self, message: str) -> Dict[str, Any]:
        return {"success": False, "error": message}

    # ------------------------------------------------------------------
    # Operazioni
    # ------------------------------------------------------------------
    def fetch(self, **filters) -> Dict[str, Any]:
        ok, value = self._run("fetch", lambda: self.backend.fetch(self.items, **filters))
        if not ok:
            return self._failure(value)
        self.items = list(value)
        return {"success": True, self.kind.plural: self.items}

    def add(self, fields: Record) -> Dict[str, Any]:
        ok, value = self._run("create", lambda: self.backend.add(self.items, dict(fields)))
        if not ok:
            return self._failure(value)
        self.items = [value] + self.items
        self._persist()
        return {"success": True, self.kind.entity: value}

    def update(self, record_id: str, changes: Record) -> Dict[str, Any]:
        ok, value = self._run(
            "update", lambda: self.backend.update(self.items, record_id, dict(changes))
        )
        if not ok:
            return self._failure(value)
        self.items = [value if item.get("id") == record_id else item for item in self.items]
        self._persist()
        return {"success": True, self.kind.entity: value}

    def delete(self, record_id: str) -> Dict[str, Any]:
        ok, value = self._run("delete", lambda: self.backend.delete(self.items, record_id))
        if not ok:
            return self._failure(value)
        self.items = [item for item in self.items if item.get("id") != record_id]
        self._persist()
        return {"success": True}

    def get(self, record_id: str) -> Optional[Record]:
        for item in self.items:
            if item.get("id") == record_id:
                return item
        return None

    def clear(self) -> None:
        """Svuota la lista (dopo una sync)."""
        self.items = []
        self.error = None
        self._persist()

    def export_for_sync(self) -> List[Record]:
        """Copie dei record senza id locale; il server ne assegna di nuovi."""
        return [
            {key: copy.deepcopy(value) for key, value in item.items() if key != "id"}
            for item in self.items
        ]


class NotesStore(ContentStore):
    kind = NOTES


class TasksStore(ContentStore):
    kind = TASKS

    def toggle(self, record_id: str) -> Dict[str, Any]:
        """Inverte ``completed`` su un task."""
        task = self.get(record_id)
        if task is None:
            return self._failure("Task not found")
        return self.update(record_id, {"completed": not task.get("completed", False)})


class IdeasStore(ContentStore):
    kind = IDEAS

    def fetch(self, category: Optional[str] = None, **filters) -> Dict[str, Any]:
        if category:
            filters["category"] = category
        return super().fetch(**filters)

    def search(self, query: str) -> Dict[str, Any]:
        """Idee corrispondenti; la lista dello store resta invariata."""
        if not query or not query.strip():
            return self._failure("Search query is required")
        ok, value = self._run("search", lambda: self.backend.search(self.items, query.strip()))
        if not ok:
            return self._failure(value)
        return {"success": True, "ideas": value}
