"""
Endpoint modules.

Each module defines an APIRouter for one area (public bookings, admin,
auth).  The routers are aggregated in ``api/router.py``.
"""
