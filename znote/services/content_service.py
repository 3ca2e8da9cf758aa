"""
CRUD limitato al proprietario, condiviso da note, task e idee.

Una sottoclasse dichiara il repository, i campi scrivibili, quelli obbligatori
e i default; la validazione per campo sta nei metodi ``clean_<field>``.
Ogni operazione riceve l'id del chiamante come ``owner_id`` e tocca solo
righe di sua proprietà.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from znote.errors import NotFoundError, ValidationError
from znote.services.logging import log_structured_event
from znote.services.unit_of_work import UnitOfWork


def check_length(label: str, value: str, max_length: Optional[int]) -> str:
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{label} must be at most {max_length} characters")
    return value


def clean_required_text(label: str, value: Any, max_length: Optional[int] = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} must be a non-empty string")
    return check_length(label, value, max_length)


def clean_optional_text(label: str, value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    return value


def clean_flag(label: str, value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(f"{label} must be true or false")
    return value


class ContentService:
    #: Chiave singolare usata nelle risposte ("note") e nelle azioni di log
    entity: str = ""
    #: Chiave plurale usata nelle liste ("notes")
    plural: str = ""
    #: Attributo della UnitOfWork che espone il repository
    repository: str = ""
    fields: Tuple[str, ...] = ()
    required: Tuple[str, ...] = ()
    required_message: str = ""
    defaults: Mapping[str, Any] = {}

    @property
    def label(self) -> str:
        return self.entity.capitalize()

    # ------------------------------------------------------------------
    # Validazione
    # ------------------------------------------------------------------
    def _clean(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Valida e normalizza i campi noti presenti in ``data``."""
        cleaned: Dict[str, Any] = {}
        for field in self.fields:
            if field not in data:
                continue
            cleaner = getattr(self, f"clean_{field}", None)
            value = data[field]
            cleaned[field] = cleaner(value) if cleaner else value
        return cleaned

    def _prepare_new(self, data: Any) -> Dict[str, Any]:
        """Campi completi per una nuova riga: obbligatori, pulizia, default."""
        if not isinstance(data, Mapping):
            raise ValidationError(f"{self.label} must be an object")

        missing = [
            field
            for field in self.required
            if data.get(field) is None
            or (isinstance(data.get(field), str) and not data[field].strip())
        ]
        if missing:
            raise ValidationError(self.required_message)

        cleaned = self._clean(data)
        for field in self.defaults:
            if cleaned.get(field) is None:
                cleaned[field] = self._default(field)
        return cleaned

    def _default(self, field: str) -> Any:
        default = self.defaults[field]
        return default() if callable(default) else default

    # ------------------------------------------------------------------
    # Operazioni
    # ------------------------------------------------------------------
    def _repo(self, uow: UnitOfWork):
        return getattr(uow, self.repository)

    def list(self, owner_id: str, **filters) -> List[Any]:
        with UnitOfWork() as uow:
            return self._repo(uow).list_owned(owner_id, **filters)

    def get(self, owner_id: str, record_id: str):
        with UnitOfWork() as uow:
            record = self._repo(uow).get(owner_id, record_id)
            if record is None:
                raise NotFoundError(f"{self.label} not found")
            return record

    def create(self, owner_id: str, data: Any):
        values = self._prepare_new(data)
        with UnitOfWork() as uow:
            record = self._repo(uow).create(owner_id, **values)
            uow.commit()
            log_structured_event(
                f"{self.entity}.created", user_id=owner_id, record_id=record.id
            )
            return record

    def update(self, owner_id: str, record_id: str, data: Any):
        """Applica solo i campi forniti; id, proprietario e timestamp non cambiano mai."""
        if not isinstance(data, Mapping):
            raise ValidationError(f"{self.label} must be an object")

        with UnitOfWork() as uow:
            record = self._repo(uow).get(owner_id, record_id)
            if record is None:
                raise NotFoundError(f"{self.label} not found")

            changes = self._clean(data)
            for field, value in changes.items():
                if value is None and field in self.defaults:
                    value = self._default(field)
                setattr(record, field, value)

            uow.commit()
            log_structured_event(
                f"{self.entity}.updated",
                user_id=owner_id,
                record_id=record_id,
                fields=sorted(changes),
            )
            return record

    def delete(self, owner_id: str, record_id: str) -> None:
        with UnitOfWork() as uow:
            if not self._repo(uow).remove(owner_id, record_id):
                raise NotFoundError(f"{self.label} not found")
            uow.commit()
            log_structured_event(
                f"{self.entity}.deleted", user_id=owner_id, record_id=record_id
            )

    def bulk_import(self, owner_id: str, records: Any) -> int:
        """
        Inserisce in un unico blocco i record ospite per ``owner_id``.

        Ogni record riceve gli stessi default di ``create``; i record con un ``id``
        già esistente vengono saltati. Restituisce il numero di righe inserite.
        """
        if not isinstance(records, list) or not records:
            raise ValidationError(f"{self.plural.capitalize()} array is required")

        rows = list(self._prepare_batch(records))
        with UnitOfWork() as uow:
            count = self._repo(uow).add_many(owner_id, rows)
            uow.commit()
            log_structured_event(
                f"{self.entity}.bulk_imported",
                user_id=owner_id,
                received=len(records),
                inserted=count,
            )
            return count

    def _prepare_batch(self, records: Iterable[Any]):
        for index, record in enumerate(records):
            try:
                row = self._prepare_new(record)
            except ValidationError as exc:
                raise ValidationError(f"{self.label} #{index}: {exc.message}")
            record_id = record.get("id")
            if isinstance(record_id, str) and 0 < len(record_id.strip()) <= 36:
                row["id"] = record_id.strip()
            yield row
