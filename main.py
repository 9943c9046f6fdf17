#main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse

import db
from middleware import RequestContextMiddleware
from routes.contract import router as contract_router
from routes.health import router as health_router
from services.observability import configure_logging
from settings import settings, validate_env_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # pool is opened lazily by the postgres backend; no-op otherwise
    db.close_pool()


def create_app() -> FastAPI:
    validate_env_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="EcoPayout Contract API", version="1.0.0", lifespan=lifespan)

    # -----------------------------
    # MIDDLEWARE
    # -----------------------------
    app.add_middleware(RequestContextMiddleware)

    # -----------------------------
    # ROUTERS
    # -----------------------------
    app.include_router(health_router)
    app.include_router(contract_router)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app


app = create_app()
