import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from healthchecker.api_schemas import HealthReportResponse
from healthchecker.reporting import build_report
from healthchecker.runner import Scheduler
from healthchecker.state import StatusStore

logger = logging.getLogger(__name__)

HEALTH_PATH = "/health"


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler: Scheduler | None = app.state.scheduler
    if scheduler is not None:
        scheduler.start()
    if app.state.port is not None:
        logger.info("HTTP server started on port %s", app.state.port)
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.stop(timeout=scheduler.timeout_s)


def create_app(
    store: StatusStore,
    scheduler: Scheduler | None = None,
    port: int | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Health Checker",
        version="1.0.0",
        description=(
            "Probes a fixed list of HTTP endpoints on an interval and "
            "reports their latest status as one aggregate."
        ),
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.scheduler = scheduler
    app.state.port = port

    @app.exception_handler(StarletteHTTPException)
    async def health_method_not_allowed(request: Request, exc: StarletteHTTPException):
        # Every method but GET on /health gets a bare 405, whatever the verb.
        if exc.status_code == 405 and request.url.path == HEALTH_PATH:
            return Response(status_code=405, headers={"Allow": "GET"})
        return await http_exception_handler(request, exc)

    @app.get(
        HEALTH_PATH,
        response_model=HealthReportResponse,
        response_model_exclude_none=True,
        tags=["system"],
        summary="Aggregated Health Report",
        description="UP only when every configured endpoint answered its last probe with 200.",
    )
    def health(request: Request):
        return build_report(request.app.state.store)

    return app
