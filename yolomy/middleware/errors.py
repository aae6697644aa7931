"""
Yolomy Products Backend — Unhandled Error Middleware
=====================================================

What:  Turns any exception that escapes the routes and exception handlers
       into a 500 `{"error": ...}` response.
How:   Installed innermost, directly around the router, so the response it
       builds still travels back through CORS, logging and request-ID
       middleware and carries their headers.

500 bodies are opaque unless settings.expose_error_details is set, in which
case the raw exception text is returned.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from yolomy.config import Settings
from yolomy.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."


def internal_error_response(config: Settings, raw_message: str) -> JSONResponse:
    message = raw_message if config.expose_error_details else INTERNAL_ERROR_MESSAGE
    return JSONResponse(status_code=500, content={"error": message})


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] Unexpected error: %s",
                request_id_var.get(""),
                str(e),
                exc_info=e,
            )
            return internal_error_response(request.app.state.settings, str(e))
