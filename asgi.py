"""
asgi.py -- Process entry point for ProjectHub.

Settings are read from the environment exactly once here; a missing
JWT_SECRET stops the process before the server binds its port.

Run with:  uvicorn asgi:app --port 5000
           projecthub            (console script, honours HOST / PORT)
"""

import uvicorn

from api.main import create_app
from core.config import get_settings

settings = get_settings()
app = create_app(settings)


def main() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
