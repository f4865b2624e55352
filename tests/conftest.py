from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the jarvis_api package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from jarvis_api.core import config as core_config  # noqa: E402
from jarvis_api.db import models  # noqa: E402
from jarvis_api.db import session as db_session  # noqa: E402


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Temporary SQLite database with fresh settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("CLIENT_BUILD_DIR", str(tmp_path / "no-build"))
    _clear_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    engine.dispose()
    _clear_caches()


@pytest.fixture()
def client(temp_db):
    from fastapi.testclient import TestClient

    from jarvis_api.app import create_app

    app = create_app(start_monitor=False)
    with TestClient(app) as test_client:
        yield test_client
