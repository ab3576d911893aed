"""
API documentation endpoint.

FastAPI's own `/docs`, `/redoc` and `/openapi.json` are disabled (see
`api/main.py`); the OpenAPI document is only served here, behind the
`X-API-KEY` gate. Browsers (Accept: text/html) get Swagger UI with the
document inlined, so the page never fetches it without the header; other
clients get the JSON document.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from . import dependencies, security

DOCS_PATH = "/api-docs"

API_TITLE = "Nuclear Power Plant API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "API documentation for Nuclear Power Plant departments"
API_SERVERS = [{"url": "http://localhost:3000", "description": "Local server"}]

router = APIRouter()


def build_openapi(app: FastAPI) -> dict[str, Any]:
    """
    OpenAPI document for every mounted route, advertising the API key scheme.
    Built once per app and cached on it.
    """
    if app.openapi_schema:
        return app.openapi_schema

    document = get_openapi(
        title=API_TITLE,
        version=API_VERSION,
        description=API_DESCRIPTION,
        routes=app.routes,
        tags=app.openapi_tags,
        servers=API_SERVERS,
    )
    components = document.setdefault("components", {})
    components["securitySchemes"] = {
        "ApiKeyAuth": {
            "type": "apiKey",
            "in": "header",
            "name": security.API_KEY_HEADER,
        }
    }
    document["security"] = [{"ApiKeyAuth": []}]
    app.openapi_schema = document
    return document


def wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "").lower()


@router.get(DOCS_PATH, include_in_schema=False, dependencies=[Depends(dependencies.require_api_key)])
async def api_docs(request: Request) -> Response:
    document = build_openapi(request.app)
    if wants_html(request):
        # Swagger UI renders an inline `spec` instead of downloading `url`.
        return get_swagger_ui_html(
            openapi_url="",
            title=f"{API_TITLE} - Swagger UI",
            swagger_ui_parameters={"spec": document},
        )
    return JSONResponse(document)
