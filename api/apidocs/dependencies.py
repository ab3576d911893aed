"""
Docs gate dependency for FastAPI routes.
"""

from __future__ import annotations

import logging

from fastapi import Header

from core.errors import AuthError

from . import security

logger = logging.getLogger(__name__)


async def require_api_key(
    x_api_key: str | None = Header(default=None, alias=security.API_KEY_HEADER),
) -> None:
    if not security.is_admitted(x_api_key, security.api_key()):
        logger.info("docs_rejected header_present=%s", x_api_key is not None)
        raise AuthError("Unauthorized")
