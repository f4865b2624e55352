from __future__ import annotations

import time

from fastapi import APIRouter, Request

from jarvis_api.repositories.entity_repository import isoformat, utc_now

router = APIRouter(tags=["health"])

PROCESS_STARTED = time.monotonic()


@router.get("/health")
def health(request: Request):
    """Liveness probe; reports the cached database state without pinging it."""
    state = getattr(request.app.state, "connection_state", None)
    return {
        "status": "OK",
        "timestamp": isoformat(utc_now()),
        "uptime": round(time.monotonic() - PROCESS_STARTED, 3),
        "persistence": state.label if state is not None else "disconnected",
    }
