"""
Application package initializer.

The API is split into ``core`` (configuration, logging, security,
database helpers and errors), ``schemas`` (pydantic models),
``services`` (pricing, booking lifecycle and business logic),
``storage`` (swappable persistence backends) and ``api`` (FastAPI
routers).
"""

from .main import app  # noqa: F401
