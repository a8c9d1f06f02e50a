"""Liveness endpoints."""

import time

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ...core.config import settings
from ...schemas.common import HealthRead


router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return settings.project_name


@router.get("/health", response_model=HealthRead)
def health() -> HealthRead:
    """Report that the process is up."""
    return HealthRead(status="OK", timestamp=int(time.time() * 1000))
