from __future__ import annotations

import os
from dataclasses import dataclass

from teamwork_mcp.core.config import ConfigError, _get_bool_env


@dataclass(frozen=True)
class HttpConfig:
    """Minimal configuration for the HTTP transport runner."""

    host: str = "127.0.0.1"
    port: int = 8080
    path: str = "/mcp"
    json_response: bool = True
    stateless_http: bool = True

    @classmethod
    def from_env(cls) -> "HttpConfig":
        raw_port = os.getenv("TW_MCP_HTTP_PORT", "").strip()
        try:
            port = int(raw_port) if raw_port else cls.port
        except ValueError:
            raise ConfigError([f"invalid TW_MCP_HTTP_PORT: {raw_port!r}"]) from None

        path = os.getenv("TW_MCP_HTTP_PATH", "").strip() or cls.path
        if not path.startswith("/"):
            path = "/" + path

        return cls(
            host=os.getenv("TW_MCP_HTTP_HOST", "").strip() or cls.host,
            port=port,
            path=path.rstrip("/") or cls.path,
            json_response=_get_bool_env("TW_MCP_HTTP_JSON_RESPONSE", cls.json_response),
            stateless_http=_get_bool_env("TW_MCP_HTTP_STATELESS", cls.stateless_http),
        )


__all__ = ["HttpConfig"]
