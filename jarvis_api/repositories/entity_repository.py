"""
Per-entity repositories pairing validation with persistence.

``EntityRepository`` is the same for products, FAQs and contacts; only the
schema kind, the SQLAlchemy model and the document fields differ. Every
method returns plain JSON-ready dicts so routers never touch ORM objects.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional

from jarvis_api.db.models import Contact, FAQ, Product
from jarvis_api.domain.schemas import ValidationFailed, validate_payload
from jarvis_api.repositories.sql_repository import SQLRepository


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        # SQLite drops the offset; values are always written in UTC.
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class EntityRepository:
    kind: str
    model: type
    fields: tuple[str, ...]
    store: SQLRepository = field(default_factory=SQLRepository)
    clock: Callable[[], datetime] = utc_now

    def to_document(self, entity: Any) -> dict:
        doc = {"_id": entity.id, "id": entity.id}
        for name in self.fields:
            doc[name] = getattr(entity, name)
        doc["createdAt"] = isoformat(entity.created_at)
        doc["updatedAt"] = isoformat(entity.updated_at)
        return doc

    def _stamped(self, values: dict) -> dict:
        now = self.clock()
        return {**values, "created_at": now, "updated_at": now}

    def create(self, payload: Any) -> dict:
        """Validate and store one record.

        Raises ValidationFailed before any write when the payload is invalid,
        and StorageError when the database rejects or cannot take the write.
        """
        outcome = validate_payload(self.kind, payload)
        if not outcome.ok:
            raise ValidationFailed(outcome.errors)
        entity = self.store.insert_one(self.model, self._stamped(outcome.value))
        return self.to_document(entity)

    def insert_many(self, rows: Iterable[dict]) -> list[dict]:
        """Store already-trusted rows (sample data) in a single batch."""
        entities = self.store.insert_many(self.model, [self._stamped(dict(row)) for row in rows])
        return [self.to_document(entity) for entity in entities]

    def list(self) -> list[dict]:
        return [self.to_document(entity) for entity in self.store.find_all(self.model)]

    def count(self) -> int:
        return self.store.count(self.model)

    def delete_all(self) -> int:
        return self.store.delete_all(self.model)


def product_repository(store: SQLRepository | None = None, **kwargs: Any) -> EntityRepository:
    return EntityRepository(
        kind="product",
        model=Product,
        fields=("name", "description", "price", "image", "category", "features"),
        store=store or SQLRepository(),
        **kwargs,
    )


def faq_repository(store: SQLRepository | None = None, **kwargs: Any) -> EntityRepository:
    return EntityRepository(
        kind="faq",
        model=FAQ,
        fields=("question", "answer", "category"),
        store=store or SQLRepository(),
        **kwargs,
    )


def contact_repository(store: SQLRepository | None = None, **kwargs: Any) -> EntityRepository:
    return EntityRepository(
        kind="contact",
        model=Contact,
        fields=("name", "email", "message", "status"),
        store=store or SQLRepository(),
        **kwargs,
    )
