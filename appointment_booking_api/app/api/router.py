"""
Top‑level API router.

This router aggregates the domain routers under a unified prefix.  When
new endpoints are added, update this file to include their routers.
The health router is mounted separately at the application root.
"""

from fastapi import APIRouter

from .endpoints import appointments, services

router = APIRouter()

router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
