"""
Top-level API router.

Aggregates the public booking, admin and auth routers.  The application
mounts this router under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, bookings


router = APIRouter()

# The bookings and auth routers define their full paths internally.
router.include_router(bookings.router, tags=["bookings"])
router.include_router(auth.router, tags=["auth"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])


@router.get("/health", tags=["info"])
async def health() -> dict:
    return {"status": "ok"}
