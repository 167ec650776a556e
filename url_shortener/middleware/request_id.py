"""
Middleware that injects a request ID into every incoming request.
"""

import logging
import time
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse

from ..core.logging import request_id_var

logger = logging.getLogger(__name__)


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()
        status = {"code": 500, "started": False}

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status["code"] = message["status"]
                status["started"] = True
                headers = message.setdefault("headers", [])
                headers.append((b"x-request-id", request_id.encode()))
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            # Handled here so the log line and the response keep the request id
            logger.exception(f"Unhandled exception: {exc}")
            if status["started"]:
                raise
            response = JSONResponse(
                status_code=500,
                content={"status": "Error", "error": "internal error"},
            )
            await response(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                f"{request.method} {request.url.path} - "
                f"Status: {status['code']} - Duration: {duration_ms:.2f}ms"
            )
            request_id_var.reset(token)
