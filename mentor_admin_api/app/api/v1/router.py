"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified prefix.
When new domains are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import audit, mentors

router = APIRouter()

router.include_router(mentors.router, prefix="/mentors", tags=["mentors"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
