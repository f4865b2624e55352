from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, JSONResponse

from jarvis_api.core.errors import not_found_response
from jarvis_api.core.rate_limiter import rate_limit_api
from jarvis_api.routers.deps import get_settings_from

router = APIRouter(prefix="", tags=["pages"])

API_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


@router.api_route(
    "/api/{rest:path}",
    methods=API_METHODS,
    dependencies=[Depends(rate_limit_api)],
    include_in_schema=False,
)
def api_not_found(rest: str):
    return not_found_response()


@router.get("/{full_path:path}", include_in_schema=False)
def spa_shell(full_path: str, request: Request):
    """Serve a file from the compiled client build, falling back to index.html."""
    build_dir = Path(get_settings_from(request).client_build_dir).resolve()
    index = build_dir / "index.html"
    if full_path:
        candidate = (build_dir / full_path).resolve()
        if candidate.is_file() and candidate.is_relative_to(build_dir):
            return FileResponse(candidate)
    if index.is_file():
        return FileResponse(index, media_type="text/html")
    return JSONResponse(status_code=404, content={"message": "Client build not found"})
