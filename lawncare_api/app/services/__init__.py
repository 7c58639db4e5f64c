"""
Service layer.

Each service encapsulates business logic for a domain and works against
the ``Storage`` interface, so the in-memory and SQLite backends can be
swapped without changing API handlers.  Pricing and the status
lifecycle are pure functions in their own modules.
"""
