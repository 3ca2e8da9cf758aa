"""
Servizi di autenticazione: registrazione, login e lettura del profilo.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from znote.errors import AuthError, ConflictError, NotFoundError, ValidationError
from znote.models import User
from znote.models.user import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH
from znote.security import create_access_token, hash_password, verify_password
from znote.services.content_service import check_length
from znote.services.logging import log_structured_event
from znote.services.unit_of_work import UnitOfWork

INVALID_CREDENTIALS = "Invalid email or password"


def _require_credentials(email: Optional[str], password: Optional[str]) -> None:
    if not email or not password:
        raise ValidationError("Email and password are required")
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError("Email and password must be strings")


def _auth_payload(user: User) -> Dict[str, Any]:
    return {
        "user": user.to_dict(),
        "token": create_access_token(user.id, user.email),
    }


def register_user(
    email: Optional[str], password: Optional[str], name: Optional[str] = None
) -> Dict[str, Any]:
    """
    Crea un account e restituisce ``{"user": ..., "token": ...}``.

    Solleva ConflictError se l'email è già registrata.
    """
    _require_credentials(email, password)
    check_length("Email", email, EMAIL_MAX_LENGTH)
    if name is not None and not isinstance(name, str):
        raise ValidationError("Name must be a string")
    if name:
        check_length("Name", name, NAME_MAX_LENGTH)

    with UnitOfWork() as uow:
        if uow.users.email_exists(email):
            raise ConflictError("User already exists with this email")

        user = User(
            email=email,
            password_hash=hash_password(password),
            name=name or None,
        )
        uow.users.add(user)
        try:
            uow.commit()
        except IntegrityError:
            # Registrazione concorrente con la stessa email
            raise ConflictError("User already exists with this email")

        log_structured_event("user.registered", user_id=user.id)
        return _auth_payload(user)


def login_user(email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
    """
    Verifica le credenziali e restituisce ``{"user": ..., "token": ...}``.

    Email sconosciuta e password errata falliscono con lo stesso messaggio.
    """
    _require_credentials(email, password)

    with UnitOfWork() as uow:
        user = uow.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            log_structured_event("user.login_failed", level="warning")
            raise AuthError(INVALID_CREDENTIALS)

        log_structured_event("user.logged_in", user_id=user.id)
        return _auth_payload(user)


def get_profile(user_id: str) -> Dict[str, Any]:
    with UnitOfWork() as uow:
        user = uow.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user.to_dict(include_created=True)
