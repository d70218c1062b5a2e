"""
Access log for API calls.

One line per /api request:

    GET /api/admin/status 200 in 3ms :: {"id":"admin_status",...}

Lines are cut at 80 characters. Password values in logged bodies are masked.
"""

from __future__ import annotations

import json
import time
from typing import Any, List, Optional

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from chatdesk.utils.logger import get_logger

logger = get_logger(__name__)

MAX_LINE_LENGTH = 80
LOGGED_PREFIX = "/api"


def _mask_passwords(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: ("***" if k == "password" else _mask_passwords(v)) for k, v in value.items()}
    if isinstance(value, list):
        return [_mask_passwords(v) for v in value]
    return value


def format_log_line(method: str, path: str, status_code: int, duration_ms: int, body: Optional[bytes]) -> str:
    line = f"{method} {path} {status_code} in {duration_ms}ms"
    if body:
        try:
            parsed = json.loads(body)
        except ValueError:
            parsed = None
        if parsed is not None:
            line += " :: " + json.dumps(_mask_passwords(parsed), ensure_ascii=False, separators=(",", ":"))
    if len(line) > MAX_LINE_LENGTH:
        line = line[: MAX_LINE_LENGTH - 1] + "…"
    return line


class RequestLogMiddlewareASGI:
    """Raw ASGI middleware; wraps ``send`` to capture status and JSON body"""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        path = scope.get("path") or ""
        if scope.get("type") != "http" or not path.startswith(LOGGED_PREFIX):
            await self.app(scope, receive, send)
            return

        start = time.monotonic()
        status_code = 500
        is_json = False
        chunks: List[bytes] = []

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code, is_json
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = dict(message.get("headers") or [])
                is_json = headers.get(b"content-type", b"").startswith(b"application/json")
            elif message["type"] == "http.response.body" and is_json:
                chunks.append(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = int((time.monotonic() - start) * 1000)
            line = format_log_line(scope.get("method", ""), path, status_code, duration_ms, b"".join(chunks))
            logger.info(line)
