"""
Livello di stato del client Znote.

``create_client()`` collega lo storage locale, il client API, i tre store
dei contenuti e lo store di autenticazione.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .api import ApiClient, ApiError
from .auth import AuthStore
from .backends import LocalBackend, RemoteBackend
from .storage import LocalStorage
from .stores import ContentStore, IdeasStore, NotesStore, TasksStore
from .sync import SyncResult, sync_guest_data


@dataclass
class Client:
    auth: AuthStore
    notes: NotesStore
    tasks: TasksStore
    ideas: IdeasStore
    api: ApiClient
    storage: LocalStorage


def create_client(
    data_dir: Optional[Union[str, Path]] = None,
    api_url: Optional[str] = None,
    session=None,
) -> Client:
    storage = LocalStorage(data_dir)
    api = ApiClient(base_url=api_url, session=session)
    notes = NotesStore(storage, api)
    tasks = TasksStore(storage, api)
    ideas = IdeasStore(storage, api)
    auth = AuthStore(storage, api, stores=[notes, tasks, ideas])
    return Client(auth=auth, notes=notes, tasks=tasks, ideas=ideas, api=api, storage=storage)


__all__ = [
    "ApiClient",
    "ApiError",
    "AuthStore",
    "Client",
    "ContentStore",
    "IdeasStore",
    "LocalBackend",
    "LocalStorage",
    "NotesStore",
    "RemoteBackend",
    "SyncResult",
    "TasksStore",
    "create_client",
    "sync_guest_data",
]
