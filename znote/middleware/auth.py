"""
Middleware di autenticazione con token bearer.

I blueprint protetti chiamano ``require_auth(bp)``: prima di ogni richiesta
viene verificato l'header ``Authorization: Bearer <token>`` (firma e scadenza,
senza cache) e il chiamante viene salvato in ``flask.g.current_user``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import Blueprint, g, request

from znote.errors import AuthError
from znote.security import decode_access_token


@dataclass
class CurrentUser:
    """
    Identità del chiamante estratta da un token verificato.

    - id: id utente (owner id di ogni operazione sui contenuti)
    - email: claim email
    """

    id: str
    email: str


def authenticate_request() -> CurrentUser:
    """Verifica il token bearer della richiesta corrente e imposta ``g.current_user``."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise AuthError("No authorization header provided")

    scheme, _, token = auth_header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthError("No token provided")

    claims = decode_access_token(token)
    g.current_user = CurrentUser(id=claims.user_id, email=claims.email)
    return g.current_user


def require_auth(bp: Blueprint) -> Blueprint:
    """Registra il controllo del token su tutte le route di ``bp``."""

    @bp.before_request
    def verify_bearer_token() -> None:
        # Il preflight CORS non porta credenziali
        if request.method == "OPTIONS":
            return None
        authenticate_request()
        return None

    return bp


def current_user() -> Optional[CurrentUser]:
    return getattr(g, "current_user", None)


def current_user_id() -> str:
    user = current_user()
    if user is None:
        raise AuthError("Authentication required")
    return user.id
