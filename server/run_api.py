"""Run the API service.

Usage:
    uvicorn server.api:app --host 0.0.0.0 --port 3000

(Or run this module directly; PORT / HOST / NODE_ENV are read from the environment.)
"""

import logging

import uvicorn

from server.api import create_app, describe_app
from server.config import load_settings
from server.logger import log, resolve_level


def main():
    settings = load_settings()
    level = resolve_level(settings.log_level)
    log.setLevel(level)
    app = create_app(settings=settings)
    log.info(f"Starting API service: {describe_app(app)}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=logging.getLevelName(level).lower())


if __name__ == "__main__":
    main()
