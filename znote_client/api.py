"""
Client HTTP per l'API REST di Znote (basato su ``requests``).

Aggiunge ``Authorization: Bearer <token>`` quando un token è disponibile e
trasforma ogni errore in un ``ApiError`` con il messaggio ``error`` del
server. Una risposta 401 invoca ``on_unauthorized`` (lo store di
autenticazione esegue il logout).
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"


class ApiError(Exception):
    def __init__(self, status: Optional[int], message: str):
        self.status = status
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ApiError(status={self.status!r}, message={self.message!r})"


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        session=None,
        timeout: float = 10.0,
    ):
        self.base_url = (base_url or os.environ.get("ZNOTE_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.token_provider = token_provider
        self.on_unauthorized = on_unauthorized
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self, auth: bool = True) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = self.token_provider() if auth and self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        auth: bool = True,
    ) -> Dict[str, Any]:
        """
        Invia una richiesta JSON; con ``auth=False`` non aggiunge il token
        bearer (login, registrazione).
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = self._headers(auth)
        try:
            response = self.session.request(
                method,
                url,
                json=json,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Richiesta %s %s fallita: %s", method, url, exc)
            raise ApiError(None, "Network error, please try again")

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            message = body.get("error") if isinstance(body, dict) else None
            message = message or f"Request failed with status {response.status_code}"
            # Solo un token rifiutato chiude la sessione, non credenziali errate
            if response.status_code == 401 and "Authorization" in headers and self.on_unauthorized:
                self.on_unauthorized()
            raise ApiError(response.status_code, message)

        return body if isinstance(body, dict) else {"data": body}

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, auth: bool = True) -> Dict[str, Any]:
        return self.request("POST", path, json=json, auth=auth)

    def put(self, path: str, json: Any = None) -> Dict[str, Any]:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Dict[str, Any]:
        return self.request("DELETE", path)
