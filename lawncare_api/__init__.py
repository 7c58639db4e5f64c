"""
Top-level package for the Lawn Care Booking API.

All functionality lives in submodules under ``app``; the package
itself exports nothing.
"""

__all__ = []
