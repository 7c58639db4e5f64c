"""
Pydantic schema definitions for API payloads.

Bookings, users and dashboard statistics each define their own models
for request and response bodies.  Schemas are separated from the
storage backends to decouple API representation from persistence.
"""
