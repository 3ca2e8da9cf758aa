"""
Stato di autenticazione del client.

Stato (salvato sotto ``znote-auth``): user, token, is_authenticated,
is_guest. Login, logout e registrazione portano ogni store di contenuti
collegato tra modalità ospite e modalità autenticata.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .api import ApiClient, ApiError
from .storage import LocalStorage
from .stores import ContentStore
from .sync import sync_guest_data

logger = logging.getLogger(__name__)

STORAGE_KEY = "znote-auth"


class AuthStore:
    def __init__(
        self,
        storage: LocalStorage,
        api: ApiClient,
        stores: Iterable[ContentStore] = (),
    ):
        self.storage = storage
        self.api = api
        self.api.token_provider = lambda: self.token
        self.api.on_unauthorized = self.logout
        self.stores: List[ContentStore] = list(stores)

        state = storage.get(STORAGE_KEY)
        if not isinstance(state, dict):
            state = {}
        self.user: Optional[Dict[str, Any]] = state.get("user")
        self.token: Optional[str] = state.get("token")
        self.is_authenticated: bool = bool(state.get("is_authenticated") and self.token)
        self.is_guest: bool = not self.is_authenticated

        self._switch_stores()

    def _persist(self) -> None:
        self.storage.set(
            STORAGE_KEY,
            {
                "user": self.user,
                "token": self.token,
                "is_authenticated": self.is_authenticated,
                "is_guest": self.is_guest,
            },
        )

    def _switch_stores(self) -> None:
        for store in self.stores:
            if store.authenticated != self.is_authenticated:
                store.set_authenticated(self.is_authenticated)

    def _set_session(self, user: Dict[str, Any], token: str) -> None:
        self.user = user
        self.token = token
        self.is_authenticated = True
        self.is_guest = False
        self._persist()

    def attach(self, *stores: ContentStore) -> None:
        for store in stores:
            self.stores.append(store)
            if store.authenticated != self.is_authenticated:
                store.set_authenticated(self.is_authenticated)

    def register(
        self, email: str, password: str, name: Optional[str] = None, sync: bool = True
    ) -> Dict[str, Any]:
        """
        Crea l'account, poi vi trasferisce i record della modalità ospite.

        Il risultato contiene ``sync`` (conteggi ed errori per tipo) quando
        c'erano dati ospite; un errore di sync non annulla la registrazione.
        """
        try:
            data = self.api.post(
                "/auth/register",
                {"email": email, "password": password, "name": name},
                auth=False,
            )
        except ApiError as exc:
            return {"success": False, "error": exc.message or "Registration failed"}

        self._set_session(data["user"], data["token"])

        result: Dict[str, Any] = {"success": True, "user": self.user}
        if sync and any(store.items for store in self.stores if not store.authenticated):
            sync_result = sync_guest_data(
                self.api, [store for store in self.stores if not store.authenticated]
            )
            result["sync"] = sync_result.to_dict()

        self._switch_stores()
        return result

    def login(self, email: str, password: str) -> Dict[str, Any]:
        try:
            data = self.api.post(
                "/auth/login", {"email": email, "password": password}, auth=False
            )
        except ApiError as exc:
            return {"success": False, "error": exc.message or "Login failed"}

        self._set_session(data["user"], data["token"])
        self._switch_stores()
        return {"success": True, "user": self.user}

    def logout(self) -> None:
        """Ritorno alla modalità ospite; gli store ricaricano i record salvati sul dispositivo."""
        self.user = None
        self.token = None
        self.is_authenticated = False
        self.is_guest = True
        self._persist()
        self._switch_stores()

    def get_profile(self) -> Dict[str, Any]:
        """Aggiorna ``user`` dal server."""
        try:
            data = self.api.get("/auth/profile")
        except ApiError as exc:
            logger.info("Aggiornamento profilo fallito: %s", exc.message)
            return {"success": False, "error": "Failed to fetch profile"}

        self.user = data["user"]
        self._persist()
        return {"success": True, "user": self.user}
