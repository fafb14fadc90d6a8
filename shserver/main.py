import asyncio
import logging
import time
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from shserver import __version__
from shserver.core.config import Settings, get_settings
from shserver.core.log import configure_logging
from shserver.infrastructure.database import dispose_engine, init_db
from shserver.infrastructure.database.session import get_session
from shserver.interfaces.http import create_api_router, create_public_router
from shserver.modules.access.service import LockGate
from shserver.web import STATIC_DIR

logger = logging.getLogger(__name__)


async def sweep_expired_tokens(interval: float) -> None:
    """Periodically delete expired gating tokens. Expiry is enforced on read regardless."""
    try:
        while True:
            await asyncio.sleep(interval)
            try:
                async for session in get_session():
                    removed = await LockGate.with_session(session).purge_expired()
                if removed:
                    logger.info("Purged %s expired tokens", removed)
            except Exception as exc:
                logger.error("Token sweep failed: %s", exc)
    except asyncio.CancelledError:
        logger.debug("Token sweeper cancelled")
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    await init_db()
    if not settings.admin_token:
        logger.warning("No admin token configured; the admin API is unrestricted")

    sweeper = None
    if settings.security.token_sweep_interval_seconds > 0:
        sweeper = asyncio.create_task(sweep_expired_tokens(settings.security.token_sweep_interval_seconds))
    try:
        yield
    finally:
        if sweeper is not None:
            sweeper.cancel()
            with suppress(asyncio.CancelledError):
                await sweeper
        await dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    app = FastAPI(
        title=settings.project_name,
        description="Shell scripts over HTTP for curl | sh, with optional password locks",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request body", "errors": jsonable_encoder(exc.errors())},
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(create_api_router(settings.api_prefix))
    # Last: its catch-all route serves script paths.
    app.include_router(create_public_router())

    return app


app = create_app()
