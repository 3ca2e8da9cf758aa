"""
Hash delle password (bcrypt tramite passlib) e token bearer (JWT tramite
python-jose).

Le impostazioni sono lette dalla config dell'app Flask corrente:
BCRYPT_ROUNDS, JWT_SECRET_KEY, JWT_ALGORITHM, JWT_EXPIRES_DAYS.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from flask import current_app
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from znote.errors import AuthError

_contexts = {}


def _pwd_context() -> CryptContext:
    rounds = int(current_app.config.get("BCRYPT_ROUNDS", 10))
    context = _contexts.get(rounds)
    if context is None:
        context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )
        _contexts[rounds] = context
    return context


def hash_password(password: str) -> str:
    return _pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return _pwd_context().verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Hash salvato malformato
        return False


@dataclass
class TokenClaims:
    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


def create_access_token(
    user_id: str, email: str, expires_delta: Optional[timedelta] = None
) -> str:
    """Firma un token con id ed email dell'utente."""
    config = current_app.config
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=int(config.get("JWT_EXPIRES_DAYS", 7)))
    expiry = now + expires_delta

    payload = {
        "user_id": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(expiry.timestamp()),
    }
    return jwt.encode(
        payload, config["JWT_SECRET_KEY"], algorithm=config.get("JWT_ALGORITHM", "HS256")
    )


def decode_access_token(token: str) -> TokenClaims:
    """
    Verifica firma e scadenza.

    Solleva AuthError("Token expired") oppure AuthError("Invalid token").
    """
    config = current_app.config
    try:
        payload = jwt.decode(
            token,
            config["JWT_SECRET_KEY"],
            algorithms=[config.get("JWT_ALGORITHM", "HS256")],
        )
    except ExpiredSignatureError:
        raise AuthError("Token expired")
    except JWTError:
        raise AuthError("Invalid token")

    user_id = payload.get("user_id")
    if not user_id or "exp" not in payload:
        raise AuthError("Invalid token")

    return TokenClaims(
        user_id=str(user_id),
        email=payload.get("email", ""),
        issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
