"""Piccole funzioni di supporto condivise dagli store del client."""

import random
import string
import time
from datetime import datetime, timezone

_ALPHABET = string.digits + string.ascii_lowercase


def generate_id() -> str:
    """
    Identificativo dei record ospite: ``<epoch millis>-<9 caratteri base36>``.

    Non crittografico; sostituito da un id del server alla sync.
    """
    suffix = "".join(random.choice(_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}-{suffix}"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
