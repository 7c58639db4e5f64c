"""
HTTP API package.

``router`` bundles the endpoint modules in ``endpoints``; ``deps``
holds the FastAPI dependencies that hand the application's storage and
settings to those endpoints.
"""
