"""
Shared-secret check for the API documentation endpoint.
"""

from __future__ import annotations

import hmac
import os

API_KEY_HEADER = "X-API-KEY"


def api_key() -> str:
    # Not stripped: the header must match the configured value exactly.
    return os.environ.get("API_KEY", "")


def is_admitted(supplied: str | None, configured: str) -> bool:
    """
    True only when a header was sent, a secret is configured, and the two
    are byte-for-byte equal. An unset or empty secret never admits.

    Starlette decodes header values as latin-1, so encoding `supplied` back
    with latin-1 recovers the bytes the client sent. Those are compared with
    the UTF-8 bytes of the configured secret.
    """
    if supplied is None or not configured:
        return False
    try:
        raw = supplied.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return hmac.compare_digest(raw, configured.encode("utf-8"))
