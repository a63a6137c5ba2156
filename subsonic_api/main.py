"""Application entrypoint.

Run either:
  uvicorn subsonic_api.main:app --reload
OR:
  python server.py

`create_app()` builds a fresh app; tests pass their own AppConfig and fakes.
"""
from __future__ import annotations
import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

from subsonic_api.config import CONFIG, AppConfig
from subsonic_api.api.catalog import router as catalog_router
from subsonic_api.api.contact import router as contact_router
from subsonic_api.services.contact_service import ContactRequestHandler

logger = logging.getLogger(__name__)


def create_app(config: AppConfig | None = None, *, contact_handler: ContactRequestHandler | None = None) -> FastAPI:
    config = config or CONFIG
    app = FastAPI(title="Subsonic Producciones API")
    app.state.config = config
    app.state.contact_handler = contact_handler or ContactRequestHandler(config)

    handler = app.state.contact_handler
    logger.info(
        "Contact handler ready (storage=%s, email=%s).",
        getattr(handler.quote_store, "backend", None) or "disabled",
        "enabled" if handler.notifier is not None else "disabled",
    )

    app.include_router(contact_router)
    app.include_router(catalog_router)

    @app.get("/healthz")
    def _healthz():
        return {"ok": True, "ts": int(time.time())}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allowed_origins,
        allow_credentials=config.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    return app


app: FastAPI = create_app()

__all__ = ["app", "create_app"]
