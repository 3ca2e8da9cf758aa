"""
Trasferimento una tantum dei record ospite a un account appena registrato.

Per ogni store con almeno un record, i record (senza id locale) vengono
inviati a ``/<plural>/sync``. Ogni tipo di contenuto è una richiesta
indipendente: un errore viene riportato, non ritentato, e non annulla gli
altri tipi né la registrazione. Gli store sincronizzati vengono svuotati;
uno store il cui import è fallito tiene i record sul dispositivo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable

from .api import ApiClient, ApiError
from .stores import ContentStore

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    synced: Dict[str, int] = field(default_factory=dict)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        return {"success": self.ok, "synced": dict(self.synced), "failed": dict(self.failed)}


def sync_guest_data(api: ApiClient, stores: Iterable[ContentStore]) -> SyncResult:
    stores = list(stores)
    result = SyncResult()
    done = []

    for store in stores:
        records = store.export_for_sync()
        if not records:
            continue
        plural = store.kind.plural
        try:
            data = api.post(f"/{plural}/sync", {plural: records})
        except ApiError as exc:
            logger.warning("Sync di %s fallita: %s", plural, exc.message)
            result.failed[plural] = exc.message
            continue
        result.synced[plural] = int(data.get("count", 0))
        done.append(store)

    targets = stores if result.ok else done
    for store in targets:
        store.clear()

    logger.info(
        "Sync dei dati ospite completata",
        extra={"synced": result.synced, "failed": sorted(result.failed)},
    )
    return result
