from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from jarvis_api.core.errors import error_response, validation_response
from jarvis_api.domain.schemas import ValidationFailed
from jarvis_api.repositories.sql_repository import StorageError
from jarvis_api.routers.deps import get_repository, get_settings_from

router = APIRouter(prefix="/products", tags=["products"])
logger = logging.getLogger(__name__)


@router.get("")
def list_products(request: Request):
    try:
        return get_repository(request, "products").list()
    except StorageError as exc:
        logger.exception("Error fetching products")
        return error_response("Error fetching products", get_settings_from(request), exc=exc)


@router.post("", status_code=201)
def create_product(request: Request, payload: Any = Body(None)):
    try:
        product = get_repository(request, "products").create(payload)
    except ValidationFailed as exc:
        return validation_response(exc.errors)
    except StorageError as exc:
        logger.exception("Error creating product")
        return error_response("Error creating product", get_settings_from(request), exc=exc)
    return JSONResponse(status_code=201, content=product)
