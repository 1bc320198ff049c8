from __future__ import annotations

import json
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from teamwork_mcp.core.context import (
    AUTHORIZATION_HEADER,
    MissingBearerTokenError,
    apply_request_context,
    bearer_token_from_header,
    get_context,
    reset_context,
)

from .request_id_middleware import REQUEST_ID_HEADER


class ContextMiddleware(BaseHTTPMiddleware):
    """
    Seed the request ContextVars from the ``Authorization: Bearer`` header.
    The configured default token is used when the header is absent; a request
    with neither is rejected with 401 before reaching the MCP app.
    """

    def __init__(self, app, default_token: Optional[str] = None):
        super().__init__(app)
        self.default_token = default_token or None

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = getattr(request.state, "request_id", None) or request.headers.get(
            REQUEST_ID_HEADER
        )
        token = (
            bearer_token_from_header(request.headers.get(AUTHORIZATION_HEADER))
            or self.default_token
        )

        tokens = apply_request_context(token, request_id)
        try:
            context = get_context(require_token=True)
        except MissingBearerTokenError as exc:
            reset_context(tokens)
            return self._error_response(
                status=401,
                code="missing_bearer_token",
                message=str(exc),
                request_id=request_id or "",
            )
        try:
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = context.request_id
            return response
        finally:
            reset_context(tokens)

    @staticmethod
    def _error_response(
        *, status: int, code: str, message: str, request_id: str
    ) -> Response:
        body = {
            "error": code,
            "message": message,
            "request_id": request_id,
        }
        return Response(
            json.dumps(body),
            status_code=status,
            media_type="application/json",
            headers={REQUEST_ID_HEADER: request_id, "WWW-Authenticate": "Bearer"},
        )


__all__ = ["ContextMiddleware"]
