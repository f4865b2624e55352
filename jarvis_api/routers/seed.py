from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from jarvis_api.core.errors import error_response
from jarvis_api.repositories.sql_repository import StorageError
from jarvis_api.routers.deps import get_seed_service, get_settings_from
from jarvis_api.services.seed_service import SeedInProgressError

router = APIRouter(tags=["seed"])
logger = logging.getLogger(__name__)


@router.post("/init-data")
def init_data(request: Request, payload: Any = Body(None)):
    # Only a literal JSON true forces a reseed.
    force = isinstance(payload, dict) and payload.get("force") is True
    try:
        result = get_seed_service(request).initialize(force=force)
    except SeedInProgressError as exc:
        return JSONResponse(status_code=409, content={"message": str(exc)})
    except StorageError as exc:
        logger.exception("Error initializing data")
        return error_response("Error initializing sample data", get_settings_from(request), exc=exc)
    if not result.created:
        return {"message": result.message}
    return {"message": result.message, "data": {"products": result.products, "faqs": result.faqs}}
