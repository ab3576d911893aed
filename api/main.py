from __future__ import annotations

import os
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from apidocs import router as apidocs_router
from core import db
from core.errors import ApiError, NotFoundError
from core.logging import configure_logging
from crud.repository import PostgresRecordStore, RecordStore
from crud.schemas import format_validation_message
from departments import catalog

load_dotenv()

DEFAULT_PORT = 3000


def listen_host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0"


def listen_port() -> int:
    raw = os.environ.get("PORT", "").strip()
    try:
        return int(raw) if raw else DEFAULT_PORT
    except ValueError:
        return DEFAULT_PORT


def create_app(store: RecordStore | None = None) -> FastAPI:
    configure_logging()
    if store is None:
        store = PostgresRecordStore(db.Database())

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # A store that fails to connect is logged, not fatal.
        await store.open(catalog.collections())
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        openapi_tags=catalog.openapi_tags(),
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(_: Request, exc: ApiError):
        if isinstance(exc, NotFoundError):
            return PlainTextResponse(exc.message, status_code=exc.status_code)
        return JSONResponse({"message": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        label = "Request"
        route = request.scope.get("route")
        if route is not None and getattr(route, "tags", None):
            label = str(route.tags[0])
        return JSONResponse(
            {"message": format_validation_message(label, list(exc.errors()))},
            status_code=400,
        )

    catalog.mount(app, store)
    app.include_router(apidocs_router.router, tags=["docs"])

    @app.get("/health", include_in_schema=False)
    def health() -> dict:
        return {
            "status": "ok",
            "store": "connected" if store.is_available else "unavailable",
        }

    @app.get("/", include_in_schema=False)
    def root() -> dict:
        return {"message": "plant departments api"}

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=listen_host(), port=listen_port())


if __name__ == "__main__":
    run()
