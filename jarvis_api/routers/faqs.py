from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from jarvis_api.core.errors import error_response, validation_response
from jarvis_api.domain.schemas import ValidationFailed
from jarvis_api.repositories.sql_repository import StorageError
from jarvis_api.routers.deps import get_repository, get_settings_from

router = APIRouter(prefix="/faqs", tags=["faqs"])
logger = logging.getLogger(__name__)


@router.get("")
def list_faqs(request: Request):
    try:
        return get_repository(request, "faqs").list()
    except StorageError as exc:
        logger.exception("Error fetching FAQs")
        return error_response("Error fetching FAQs", get_settings_from(request), exc=exc)


@router.post("", status_code=201)
def create_faq(request: Request, payload: Any = Body(None)):
    """Store a FAQ entry; a missing category falls back to "general"."""
    try:
        faq = get_repository(request, "faqs").create(payload)
    except ValidationFailed as exc:
        return validation_response(exc.errors)
    except StorageError as exc:
        logger.exception("Error creating FAQ")
        return error_response("Error creating FAQ", get_settings_from(request), exc=exc)
    return JSONResponse(status_code=201, content=faq)
