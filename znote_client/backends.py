"""
Backend di memorizzazione dietro gli store del client.

``LocalBackend`` (modalità ospite) tiene i record solo sul dispositivo;
``RemoteBackend`` (modalità autenticata) passa dall'API REST. Espongono gli
stessi metodi: uno store sceglie il backend quando cambia lo stato di
autenticazione e non distingue i casi a ogni chiamata.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .api import ApiClient
from .utils import generate_id, now_iso

Record = Dict[str, Any]


@dataclass(frozen=True)
class ContentKind:
    """Descrive un tipo di contenuto: chiavi delle risposte e default in modalità ospite."""

    entity: str
    plural: str
    defaults: Callable[[], Record] = field(default=dict)

    @property
    def label(self) -> str:
        return self.entity.capitalize()

    @property
    def storage_key(self) -> str:
        return f"znote-{self.plural}"


NOTES = ContentKind(
    "note", "notes", lambda: {"color": "#ffffff", "is_pinned": False}
)
TASKS = ContentKind(
    "task",
    "tasks",
    lambda: {"description": None, "completed": False, "priority": "medium", "due_date": None},
)
IDEAS = ContentKind("idea", "ideas", lambda: {"category": "general", "tags": []})


class NotFound(Exception):
    """Record non trovato in locale."""


def matches_query(record: Record, query: str) -> bool:
    """Stessa regola del server: il testo contiene la query o un tag coincide (case-insensitive)."""
    needle = query.lower()
    if needle in str(record.get("title") or "").lower():
        return True
    if needle in str(record.get("description") or "").lower():
        return True
    return any(str(tag).lower() == needle for tag in record.get("tags") or [])


class LocalBackend:
    remote = False

    def __init__(self, kind: ContentKind):
        self.kind = kind

    def fetch(self, items: List[Record], **filters) -> List[Record]:
        # La lista salvata è già quella di riferimento
        return items

    def add(self, items: List[Record], fields: Record) -> Record:
        timestamp = now_iso()
        record = {**self.kind.defaults(), **copy.deepcopy(fields)}
        record.update(id=generate_id(), created_at=timestamp, updated_at=timestamp)
        return record

    def update(self, items: List[Record], record_id: str, changes: Record) -> Record:
        current = _find(items, record_id, self.kind)
        changes = {k: v for k, v in changes.items() if k not in ("id", "created_at")}
        return {**current, **copy.deepcopy(changes), "updated_at": now_iso()}

    def delete(self, items: List[Record], record_id: str) -> None:
        _find(items, record_id, self.kind)

    def search(self, items: List[Record], query: str) -> List[Record]:
        return [record for record in items if matches_query(record, query)]


class RemoteBackend:
    remote = True

    def __init__(self, kind: ContentKind, api: ApiClient):
        self.kind = kind
        self.api = api

    def fetch(self, items: List[Record], **filters) -> List[Record]:
        params = {name: value for name, value in filters.items() if value}
        data = self.api.get(f"/{self.kind.plural}", params=params or None)
        return data.get(self.kind.plural, [])

    def add(self, items: List[Record], fields: Record) -> Record:
        return self.api.post(f"/{self.kind.plural}", fields)[self.kind.entity]

    def update(self, items: List[Record], record_id: str, changes: Record) -> Record:
        return self.api.put(f"/{self.kind.plural}/{record_id}", changes)[self.kind.entity]

    def delete(self, items: List[Record], record_id: str) -> None:
        self.api.delete(f"/{self.kind.plural}/{record_id}")

    def search(self, items: List[Record], query: str) -> List[Record]:
        data = self.api.get(f"/{self.kind.plural}/search", params={"query": query})
        return data.get(self.kind.plural, [])


def _find(items: List[Record], record_id: str, kind: ContentKind) -> Record:
    for record in items:
        if record.get("id") == record_id:
            return record
    raise NotFound(f"{kind.label} not found")


def backend_for(kind: ContentKind, authenticated: bool, api: Optional[ApiClient]):
    if authenticated:
        if api is None:
            raise ValueError("An ApiClient is required in authenticated mode")
        return RemoteBackend(kind, api)
    return LocalBackend(kind)
