from __future__ import annotations

from fastapi import Request

from jarvis_api.core.config import Settings
from jarvis_api.repositories.entity_repository import EntityRepository
from jarvis_api.services.seed_service import SeedService


def _state_attr(request: Request, name: str):
    value = getattr(getattr(request.app, "state", None), name, None)
    if value is None:
        raise RuntimeError(f"{name} is not configured")
    return value


def get_settings_from(request: Request) -> Settings:
    return _state_attr(request, "settings")


def get_repository(request: Request, name: str) -> EntityRepository:
    return _state_attr(request, f"{name}_repository")


def get_seed_service(request: Request) -> SeedService:
    return _state_attr(request, "seed_service")
