"""Membership presentation layer.

Webhook and import endpoints; every request becomes a typed fact before it
reaches the membership service.
"""

from __future__ import annotations

from fastapi import APIRouter

from membership.presentation.routes import imports_router, webhooks_router

router = APIRouter()
router.include_router(webhooks_router)
router.include_router(imports_router)

__all__ = ["router"]
