"""Create the catalogue, FAQ, contact and seed-marker tables."""
from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(engine: Engine | None = None) -> None:
    Base.metadata.create_all(bind=engine or get_engine())


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
