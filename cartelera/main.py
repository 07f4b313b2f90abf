import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from cartelera.api.responses import envelope
from cartelera.api.router import router as api_router
from cartelera.core.config import Settings, settings as default_settings
from cartelera.core.db import Database, StoreUnavailableError
from cartelera.core.telemetry import setup_telemetry


log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    try:
        await database.connect()
    except StoreUnavailableError:
        if app.state.settings.db_fail_fast:
            log.error("store unavailable, refusing to start")
            await database.dispose()
            raise
        log.warning("store unavailable, serving anyway; store-backed requests will answer 500")

    try:
        yield
    finally:
        await database.dispose()


async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return envelope(400, problems)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="API Cartelera",
        version="1.0.0",
        description="REST API over the cartelera table: list (GET), insert (POST) and update (PUT) listings.",
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(api_router)

    if settings.otel_enabled:
        setup_telemetry(app, settings, app.state.database)

    return app


app = create_app()


def run() -> None:
    logging.basicConfig(level=default_settings.log_level.upper())
    log.info("serving on http://%s:%s, docs at /api-docs", default_settings.host, default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
