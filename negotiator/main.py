"""FastAPI application entry point for the salary negotiation service."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from negotiator.config import Settings, get_settings, setup_logging
from negotiator.context import AppContext, build_context
from negotiator.errors import AuthenticationError, NegotiatorError, NotFound, ValidationError
from negotiator.routers.pack_router import router as pack_router
from negotiator.routers.roleplay_router import router as roleplay_router

# Initialise logging early
setup_logging()
logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong, please try again."


def _status_for(exc: NegotiatorError) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, NotFound):
        return 404
    return 500


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """Application factory."""
    settings = settings or (context.settings if context else get_settings())

    application = FastAPI(
        title="Salary Negotiation Coach",
        description=(
            "Generates personalised salary-negotiation packs from market data "
            "and lets users rehearse the conversation against a simulated manager."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.state.context = context or build_context(settings)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )

    application.include_router(pack_router)
    application.include_router(roleplay_router)

    @application.exception_handler(NegotiatorError)
    async def _negotiator_error(request: Request, exc: NegotiatorError) -> JSONResponse:
        status = _status_for(exc)
        if status == 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
            return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})
        return JSONResponse(status_code=status, content={"error": str(exc)})

    @application.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})

    @application.on_event("startup")
    async def _startup() -> None:
        logger.info(
            "Negotiation coach starting — model=%s data_dir=%s version_check=%s",
            settings.openai_model,
            settings.data_dir,
            settings.session_version_check,
        )

    return application


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "negotiator.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=True,
    )
