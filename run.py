"""Entry point for serving the Lawn Care Booking API.

Configuration (storage backend, database path, secret key, admin
credentials) is read from environment variables; see
``lawncare_api/app/core/config.py`` for the full list.  Host and port
come from ``HOST`` and ``PORT``.

Usage:
    python run.py
"""
import os

from uvicorn import Config, Server


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app="lawncare_api.app.main:app", host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
