# backend/propostas/main.py

import logging

from fastapi import FastAPI

from propostas.config import settings
from propostas.routes import router as render_router


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(title=settings.app_name)

    # Routers
    app.include_router(render_router)

    # Health
    @app.get("/health")
    def health():
        return {"ok": True, "app_name": settings.app_name}

    return app


app = create_app()
