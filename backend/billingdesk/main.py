from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from billingdesk.api.router import api_router
from billingdesk.core.config import settings
from billingdesk.services.errors import ProrationError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = FastAPI(title=settings.app_name)

    origins = settings.cors_origins
    logger.info("CORS allow_origins=%s", origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.exception_handler(ProrationError)
    async def _proration_error(request: Request, exc: ProrationError):
        """Rejected calculator input is a form error for the UI, not a server failure."""
        logger.info("proration_rejected: path=%s error=%s reason=%s", request.url.path, type(exc).__name__, exc)
        return JSONResponse(status_code=422, content={"detail": str(exc), "error": type(exc).__name__})

    app.include_router(api_router)
    return app


app = create_app()
