"""API routes mounted under /api."""

from fastapi import APIRouter, Depends

from usermanager.api import auth, dashboard, meta, users
from usermanager.core.csrf import require_csrf

router = APIRouter()
router.include_router(meta.router, tags=["meta"])
router.include_router(auth.router, prefix="/auth", tags=["auth"], dependencies=[Depends(require_csrf)])
router.include_router(users.router, prefix="/users", tags=["users"], dependencies=[Depends(require_csrf)])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
