"""
Lance l'API astro-daily avec uvicorn.

L'hôte et le port viennent des settings (`APP_HOST`, `APP_PORT`), donc aussi du fichier .env.
Usage: `astro-daily` (script installé) ou `python -m astro_daily.scripts.run_server`.
"""

from __future__ import annotations

import structlog
import uvicorn

from astro_daily.app.main import app
from astro_daily.core.settings import get_settings

log = structlog.get_logger(__name__)


def main() -> None:
    settings = get_settings()
    log.info("server_starting", host=settings.APP_HOST, port=settings.APP_PORT)
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    main()
