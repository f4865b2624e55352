"""JSON error payloads returned by the API routers."""

from __future__ import annotations

from typing import Sequence

from fastapi.responses import JSONResponse

from .config import Settings

GENERIC_ERROR = "Internal server error"


def error_detail(exc: BaseException | None, settings: Settings) -> str:
    """Exception text in development, a generic message everywhere else."""
    if exc is not None and settings.is_development:
        return str(exc) or exc.__class__.__name__
    return GENERIC_ERROR


def error_response(
    message: str,
    settings: Settings,
    *,
    exc: BaseException | None = None,
    status_code: int = 500,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "error": error_detail(exc, settings)},
    )


def validation_response(details: Sequence[str]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Validation error", "details": list(details)},
    )


def not_found_response(message: str = "API endpoint not found") -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": message})
