"""Per-request context (bearer token, request id) carried in ContextVars."""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Iterable, List, Optional

_bearer_token_var: ContextVar[str | None] = ContextVar("bearer_token", default=None)
_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

AUTHORIZATION_HEADER = "authorization"
REQUEST_ID_HEADER = "x-request-id"


class MissingBearerTokenError(ValueError):
    """Raised when a bearer token is required but missing."""


@dataclass(frozen=True)
class RequestContext:
    bearer_token: str
    request_id: str


def ensure_request_id(candidate: Optional[str] = None) -> str:
    return candidate or uuid.uuid4().hex


def bearer_token_from_header(value: Optional[str]) -> Optional[str]:
    """Return the token of an ``Authorization: Bearer <token>`` header value."""
    if not value:
        return None
    scheme, _, token = value.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def apply_request_context(
    bearer_token: Optional[str], request_id: Optional[str] = None
) -> List[Token]:
    """Set ContextVars for the duration of a request; returns tokens for reset()."""
    return [
        _bearer_token_var.set(bearer_token or None),
        _request_id_var.set(ensure_request_id(request_id)),
    ]


def reset_context(tokens: Iterable[Token]) -> None:
    for token in tokens:
        token.var.reset(token)


def current_bearer_token() -> Optional[str]:
    return _bearer_token_var.get()


def current_request_id() -> Optional[str]:
    return _request_id_var.get()


def get_context(*, require_token: bool = True) -> RequestContext:
    bearer_token = _bearer_token_var.get()
    if require_token and not bearer_token:
        raise MissingBearerTokenError("Bearer token is required and missing.")
    return RequestContext(
        bearer_token=bearer_token or "",
        request_id=ensure_request_id(_request_id_var.get()),
    )


__all__ = [
    "RequestContext",
    "MissingBearerTokenError",
    "ensure_request_id",
    "bearer_token_from_header",
    "apply_request_context",
    "reset_context",
    "current_bearer_token",
    "current_request_id",
    "get_context",
    "AUTHORIZATION_HEADER",
    "REQUEST_ID_HEADER",
]
