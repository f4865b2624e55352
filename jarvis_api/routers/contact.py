from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from jarvis_api.core.errors import error_response, validation_response
from jarvis_api.domain.schemas import ValidationFailed
from jarvis_api.repositories.sql_repository import StorageError
from jarvis_api.routers.deps import get_repository, get_settings_from

router = APIRouter(prefix="/contact", tags=["contact"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201)
def submit_contact(request: Request, payload: Any = Body(None)):
    """Store a contact-form message and acknowledge it without echoing the body."""
    try:
        contact = get_repository(request, "contacts").create(payload)
    except ValidationFailed as exc:
        return validation_response(exc.errors)
    except StorageError as exc:
        logger.exception("Error saving contact")
        return error_response("Error sending message", get_settings_from(request), exc=exc)
    return JSONResponse(
        status_code=201,
        content={
            "message": "Message sent successfully",
            "data": {"id": contact["id"], "createdAt": contact["createdAt"]},
        },
    )


@router.get("")
def list_contacts(request: Request):
    try:
        return get_repository(request, "contacts").list()
    except StorageError as exc:
        logger.exception("Error fetching contacts")
        return error_response("Error fetching contacts", get_settings_from(request), exc=exc)
