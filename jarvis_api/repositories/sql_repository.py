"""Document-style data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterable, Iterator, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from jarvis_api.db.models import SeedMarker
from jarvis_api.db.session import get_session

ModelT = TypeVar("ModelT")


class StorageError(Exception):
    """Raised when the persistence layer fails (connection, timeout, constraint)."""


@contextmanager
def _storage(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"{action} failed: {exc}") from exc


class SQLRepository:
    """Insert/find/count/delete helpers shared by every entity table."""

    # -------------------------- records --------------------------
    def insert_one(self, model: type[ModelT], values: dict) -> ModelT:
        entity = model(**values)
        with _storage(f"insert into {model.__tablename__}"), get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
        return entity

    def insert_many(self, model: type[ModelT], rows: Iterable[dict]) -> list[ModelT]:
        entities = [model(**values) for values in rows]
        if not entities:
            return []
        with _storage(f"bulk insert into {model.__tablename__}"), get_session() as session:
            session.add_all(entities)
            session.commit()
        return entities

    def find_all(self, model: type[ModelT]) -> list[ModelT]:
        """All rows of ``model``, newest ``created_at`` first."""
        with _storage(f"read {model.__tablename__}"), get_session() as session:
            stmt = select(model).order_by(model.created_at.desc())
            return list(session.execute(stmt).scalars().all())

    def count(self, model: type[ModelT]) -> int:
        with _storage(f"count {model.__tablename__}"), get_session() as session:
            return int(session.execute(select(func.count()).select_from(model)).scalar_one())

    def delete_all(self, model: type[ModelT]) -> int:
        with _storage(f"delete from {model.__tablename__}"), get_session() as session:
            result = session.execute(delete(model))
            session.commit()
            return int(result.rowcount or 0)

    # -------------------------- seed markers --------------------------
    def acquire_marker(self, name: str, *, stale_after: timedelta | None = None) -> bool:
        """Insert the unique marker ``name``; False if a live one already exists.

        A marker older than ``stale_after`` (left by a crashed process) is
        replaced.
        """
        now = datetime.now(timezone.utc)
        try:
            with get_session() as session:
                session.add(SeedMarker(name=name, created_at=now))
                session.commit()
            return True
        except IntegrityError:
            pass
        except SQLAlchemyError as exc:
            raise StorageError(f"acquire marker {name} failed: {exc}") from exc
        if stale_after is None:
            return False
        with _storage(f"replace stale marker {name}"), get_session() as session:
            stmt = (
                update(SeedMarker)
                .where(SeedMarker.name == name, SeedMarker.created_at < now - stale_after)
                .values(created_at=now)
            )
            result = session.execute(stmt)
            session.commit()
            return bool(result.rowcount)

    def release_marker(self, name: str) -> None:
        with _storage(f"release marker {name}"), get_session() as session:
            session.execute(delete(SeedMarker).where(SeedMarker.name == name))
            session.commit()
