"""
Liveness and readiness reporting for the HTTP transport.

``/healthz`` answers while the process serves requests. ``/readyz`` answers
200 only when the server can do useful work: the Teamwork.com API URL is
usable and at least one tool is exposed. The readiness payload also reports
how many tools each surface exposes and which write policy is active.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import urlsplit

from teamwork_mcp.core.config import ServerConfig
from teamwork_mcp.server import SERVER_NAME, ToolServer

HEALTH_PATH = "/healthz"
READY_PATH = "/readyz"
OPS_PATHS = frozenset({HEALTH_PATH, READY_PATH})

# tool name prefix -> surface name
SURFACES = (("twprojects-", "projects"), ("twdesk-", "desk"))


def is_ops_path(path: Optional[str]) -> bool:
    return path in OPS_PATHS


def api_url_usable(url: Optional[str]) -> bool:
    parts = urlsplit(url or "")
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def tool_counts(tool_server: ToolServer) -> Dict[str, int]:
    counts = {surface: 0 for _, surface in SURFACES}
    for tool in tool_server.tools:
        for prefix, surface in SURFACES:
            if tool.name.startswith(prefix):
                counts[surface] += 1
    return counts


@dataclass(frozen=True)
class Readiness:
    checks: Dict[str, bool]
    tools: Dict[str, int]
    read_only: bool
    allow_delete: bool

    @property
    def failed(self) -> List[str]:
        return [name for name, ok in self.checks.items() if not ok]

    @property
    def status_code(self) -> int:
        return 503 if self.failed else 200

    def payload(self) -> Dict[str, object]:
        return {
            "status": "fail" if self.failed else "ok",
            "checks": dict(self.checks),
            "failed": self.failed,
            "tools": dict(self.tools),
            "mode": {"read_only": self.read_only, "allow_delete": self.allow_delete},
        }


def readiness(config: ServerConfig, tool_server: ToolServer) -> Readiness:
    """Tools are fixed once the server is built, so one snapshot serves every request."""
    return Readiness(
        checks={
            "api_url_valid": api_url_usable(config.api_url),
            "tools_registered": bool(tool_server.tools),
        },
        tools=tool_counts(tool_server),
        read_only=config.read_only,
        allow_delete=config.allow_delete,
    )


def health_payload(config: ServerConfig) -> Dict[str, str]:
    return {"status": "ok", "server": SERVER_NAME, "version": config.version.lstrip("v")}


__all__ = [
    "HEALTH_PATH",
    "READY_PATH",
    "OPS_PATHS",
    "Readiness",
    "api_url_usable",
    "health_payload",
    "is_ops_path",
    "readiness",
    "tool_counts",
]
