"""
Generic Repository Pattern.

``SqlAlchemyRepository`` fornisce le operazioni CRUD base per qualsiasi modello.
``OwnedRepository`` è la variante per i contenuti utente: ogni metodo riceve
l'id del proprietario come primo argomento e filtra sempre su di esso, quindi
una riga di un altro utente non può essere letta, modificata o cancellata.
"""
from typing import Generic, Iterable, List, Optional, Set, Type, TypeVar

from znote.extensions import db

# Tipo generico T vincolato a un modello SQLAlchemy
T = TypeVar("T", bound=db.Model)


class SqlAlchemyRepository(Generic[T]):
    def __init__(self, session, model_cls: Type[T]):
        self.session = session
        self.model_cls = model_cls

    def add(self, entity: T) -> T:
        """Aggiunge l'entità alla sessione."""
        self.session.add(entity)
        return entity

    def get_by_id(self, id: str) -> Optional[T]:
        """Recupera per Primary Key."""
        return self.session.get(self.model_cls, id)

    def delete(self, entity: T) -> None:
        self.session.delete(entity)


class OwnedRepository(SqlAlchemyRepository[T]):
    """Repository con ogni query limitata a ``model_cls.user_id == owner_id``."""

    def _owned(self, owner_id: str):
        if not owner_id:
            raise ValueError("owner_id obbligatorio")
        return self.session.query(self.model_cls).filter(
            self.model_cls.user_id == owner_id
        )

    def get(self, owner_id: str, id: str) -> Optional[T]:
        """Restituisce la riga solo se esiste e appartiene a ``owner_id``."""
        return self._owned(owner_id).filter(self.model_cls.id == id).first()

    def list_owned(self, owner_id: str, **filters) -> List[T]:
        query = self._owned(owner_id)
        if filters:
            query = query.filter_by(**filters)
        return query.order_by(*self.default_order()).all()

    def create(self, owner_id: str, **fields) -> T:
        """Crea una riga con ``owner_id`` e la aggiunge alla sessione. Nessun commit."""
        fields.pop("user_id", None)
        entity = self.model_cls(user_id=owner_id, **fields)
        return self.add(entity)

    def remove(self, owner_id: str, id: str) -> bool:
        entity = self.get(owner_id, id)
        if entity is None:
            return False
        self.delete(entity)
        return True

    def add_many(self, owner_id: str, rows: Iterable[dict]) -> int:
        """
        Inserisce un blocco di righe con ``owner_id``.

        Le righe con un ``id`` già esistente (in tabella o prima nello stesso
        blocco) vengono saltate. Restituisce il numero di righe aggiunte. Nessun commit.
        """
        rows = list(rows)
        wanted = [row["id"] for row in rows if row.get("id")]
        taken: Set[str] = set()
        if wanted:
            taken = {
                existing_id
                for (existing_id,) in self.session.query(self.model_cls.id)
                .filter(self.model_cls.id.in_(wanted))
                .all()
            }

        entities = []
        for row in rows:
            row_id = row.get("id")
            if row_id:
                if row_id in taken:
                    continue
                taken.add(row_id)
            entities.append(self.model_cls(**{**row, "user_id": owner_id}))

        self.session.add_all(entities)
        return len(entities)

    def default_order(self):
        return (self.model_cls.created_at.desc(),)
