"""
Storage backends.

``create_storage`` picks a backend from the application settings.  The
returned instance is owned by the application built in ``main`` and
opened/closed with it.
"""

from lawncare_api.app.core.config import Settings
from lawncare_api.app.storage.base import Storage
from lawncare_api.app.storage.memory import MemoryStorage
from lawncare_api.app.storage.sqlite import SQLiteStorage


BACKENDS = ("memory", "sqlite")


def create_storage(settings: Settings) -> Storage:
    backend = settings.storage_backend.strip().lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "sqlite":
        return SQLiteStorage(settings.database_url)
    raise ValueError(
        f"Unknown STORAGE_BACKEND {settings.storage_backend!r}; expected one of {', '.join(BACKENDS)}"
    )


__all__ = ["Storage", "MemoryStorage", "SQLiteStorage", "create_storage"]
